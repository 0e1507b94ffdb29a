[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pdmigrate"
version = "0.1.0"
description = "Migrate cloud persistent disks to a new disk type, with task workflows, compatibility checks and reports"
requires-python = ">=3.10"
dependencies = []
keywords = ["persistent-disk", "migration", "snapshot", "workflow", "dag", "compute"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
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
packages = ["pdmigrate"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
