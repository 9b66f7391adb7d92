[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "proxmoxve"
version = "0.8.0"
description = "Proxmox Virtual Environment VM configuration types, request bodies and read-only data sources"
requires-python = ">=3.10"
dependencies = []
keywords = ["proxmox", "virtualization", "qemu", "infrastructure"]
classifiers = [
    "Development Status :: 4 - Beta",
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
packages = ["proxmoxve"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
