[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "decisionapi"
version = "0.1.0"
description = "Request parsing, validation, bucket ranges and campaign responses for a feature-flag decision API"
requires-python = ">=3.10"
dependencies = []
keywords = ["feature-flags", "ab-testing", "decision-api", "campaigns", "bucketing"]
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
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["decisionapi"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
