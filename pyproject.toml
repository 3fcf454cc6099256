[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "authorhub"
version = "0.1.0"
description = "A small HTTP API serving authors and their articles from a MySQL database, with MySQL wire-protocol helpers."
requires-python = ">=3.10"
keywords = ["http", "api", "flask", "mysql", "authors", "articles", "clean-architecture"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Database",
]
dependencies = [
    "flask>=2.2",
    "pymysql>=1.0",
    "python-dotenv>=1.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
authorhub = "authorhub.main:main"

[tool.hatch.build.targets.wheel]
packages = ["authorhub"]

[tool.hatch.build.targets.sdist]
include = ["authorhub", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
