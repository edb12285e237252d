[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "c4"
version = "0.1.0"
description = "C4 identifiers: SHA-512 content IDs, ID trees, file manifests and ID-addressed stores"
requires-python = ">=3.10"
dependencies = []
keywords = ["c4", "content-addressing", "sha512", "merkle-tree", "manifest", "storage"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: System :: Filesystems",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["c4"]

[tool.pytest.ini_options]
addopts = "-ra"
