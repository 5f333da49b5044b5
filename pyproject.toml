[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dockapi"
version = "0.1.0"
description = "Request and response models for the Docker Engine REST API, with a multiplexed log stream reader."
requires-python = ">=3.10"
dependencies = []
keywords = ["docker", "engine", "container", "api", "models"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dockapi"]

[tool.pytest.ini_options]
addopts = "-ra"
