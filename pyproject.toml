[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "watchkeeper"
version = "0.1.0"
description = "Container update decisions: label handling, filters, restart propagation, options and a small HTTP trigger API"
requires-python = ">=3.10"
dependencies = []
keywords = ["containers", "docker", "updates", "automation", "filters", "restart"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["watchkeeper"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
