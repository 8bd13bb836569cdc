[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "catalogkit"
version = "0.1.0"
description = "Building blocks for a small course catalogue: event dispatching, SQLite stores, resolvers, a category service, a unit of work, concurrency helpers and a command line."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "events",
    "dispatcher",
    "sqlite",
    "repository",
    "unit-of-work",
    "channel",
    "catalogue",
    "courses",
]
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
    "Topic :: Database",
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
catalogkit = "catalogkit.cli:main"
catalogkit-product = "catalogkit.product:main"
catalogkit-concurrency = "catalogkit.concurrency:main"

[tool.hatch.build.targets.wheel]
packages = ["catalogkit"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
