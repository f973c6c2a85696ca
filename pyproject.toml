[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bmpfreq"
version = "0.1.0"
description = "Frequency-domain and spatial filtering of 8-bit grayscale BMP images"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "image-processing",
    "fft",
    "bmp",
    "lowpass",
    "notch-filter",
    "butterworth",
    "contraharmonic",
    "spectrum",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Processing",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
bmpfreq-lowpass = "bmpfreq.lowpass:main"
bmpfreq-notch = "bmpfreq.notch:main"
bmpfreq-contraharmonic = "bmpfreq.contraharmonic:main"
bmpfreq-spectrum = "bmpfreq.spectrum:main"

[tool.hatch.build.targets.wheel]
packages = ["bmpfreq"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
