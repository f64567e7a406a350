[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mftweb"
version = "0.1.0"
description = "Framework-independent request logic for a managed file transfer web interface: forms, pagination, backups and error pages"
requires-python = ">=3.10"
dependencies = []
keywords = ["file transfer", "rclone", "backup", "sqlite", "web forms", "pagination"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: File Sharing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mftweb"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
