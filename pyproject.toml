[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "specvalidate"
version = "0.1.0"
description = "Validate JSON data against JSON Schema draft 4 schemas, with optional Swagger 2.0 schema rules."
requires-python = ">=3.10"
dependencies = []
keywords = ["json-schema", "swagger", "openapi", "validation"]
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
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["specvalidate"]

[tool.pytest.ini_options]
addopts = "-ra"
