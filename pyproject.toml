[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "atractk"
version = "0.1.0"
description = "ATRAC toolkit: mixed-radix FFT, MDCT/IMDCT transforms, bit-level streams and OMA container handling"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["atrac", "atrac3", "oma", "mdct", "fft", "audio", "codec", "bitstream"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Conversion",
    "Topic :: Multimedia :: Sound/Audio :: Analysis",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
atractk-omainfo = "atractk.cli:info_main"
atractk-omacp = "atractk.cli:copy_main"

[tool.hatch.build.targets.wheel]
packages = ["atractk"]

[tool.hatch.build.targets.sdist]
include = ["atractk", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
