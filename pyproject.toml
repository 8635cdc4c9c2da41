[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jellocube"
version = "0.1.0"
description = "Mass-spring simulation of a deformable jello cube inside a bounding box"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "physics",
    "simulation",
    "mass-spring",
    "soft-body",
    "runge-kutta",
    "euler",
    "ppm",
]
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
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
jellocube = "jellocube.viewer:main"
jellocube-createworld = "jellocube.createworld:main"

[tool.hatch.build.targets.wheel]
packages = ["jellocube"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
