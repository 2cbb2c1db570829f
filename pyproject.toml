[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bulktasks"
version = "0.1.0"
description = "Bulk task launch systems: serial, spawn-per-run, spinning and sleeping thread pools with dependency graphs"
requires-python = ">=3.10"
keywords = ["threads", "thread pool", "tasks", "dependencies", "concurrency"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
bulktasks-tutorial = "bulktasks.tutorial:main"

[tool.hatch.build.targets.wheel]
packages = ["bulktasks"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
