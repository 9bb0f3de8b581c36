[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rotorsim"
version = "0.1.0"
description = "Physics models for simulated multirotors, aerodynamic surfaces, underwater vehicles and their sensors"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "simulation",
    "multirotor",
    "rotor",
    "aerodynamics",
    "lift",
    "drag",
    "geomagnetism",
    "wind",
    "sonar",
    "odometry",
    "underwater",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rotorsim"]

[tool.hatch.build.targets.sdist]
include = ["rotorsim", "tests"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
