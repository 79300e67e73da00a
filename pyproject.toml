[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "netarq"
version = "1.0.0"
description = "Discrete-event network emulator with a Go-Back-N reliable transport protocol"
requires-python = ">=3.10"
dependencies = []
keywords = ["networking", "simulation", "go-back-n", "arq", "transport-protocol", "discrete-event"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["netarq"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
