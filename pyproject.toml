[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "signalacq"
version = "1.0.1"
description = "Signal acquisition core: stream readers, frame buffers, channel settings and CSV recording for serial and BLE data"
requires-python = ">=3.10"
keywords = ["serial", "ble", "plot", "acquisition", "binary", "framed", "ring buffer", "csv"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Visualization",
]
dependencies = [
    "pyserial",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["signalacq"]

[tool.pytest.ini_options]
addopts = "-ra"
