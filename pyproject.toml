[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bytescan"
version = "0.1.0"
description = "Byte and substring search routines with a small benchmark harness"
requires-python = ">=3.10"
dependencies = []
keywords = ["memchr", "memmem", "byte search", "substring search", "benchmark"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: General",
    "Topic :: System :: Benchmark",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[project.scripts]
bytescan-runner = "bytescan.engines:main"
bytescan-runner-old = "bytescan.engines:main_old"
bytescan-runner-libc = "bytescan.alt_engines:main_libc"
bytescan-runner-bytecount = "bytescan.alt_engines:main_bytecount"
bytescan-runner-jetscii = "bytescan.alt_engines:main_jetscii"
bytescan-runner-sliceslice = "bytescan.alt_engines:main_sliceslice"
bytescan-runner-std = "bytescan.alt_engines:main_std"

[tool.hatch.build.targets.wheel]
packages = ["bytescan"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
