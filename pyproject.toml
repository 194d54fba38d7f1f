[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "objectpool"
version = "0.1.0"
description = "A thread-safe generic object pool with optional idle timeout management"
requires-python = ">=3.10"
dependencies = []
keywords = ["pool", "object pool", "resource pool", "connection pool", "threading"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["objectpool"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
