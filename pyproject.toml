[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sightline"
version = "0.1.0"
description = "Personal search engine building blocks: HTML text extraction, a small full-text index with URL lens filters, and bookmark and local-file URL importers."
requires-python = ">=3.10"
keywords = ["search", "indexing", "scraper", "bookmarks", "html", "bm25"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Indexing/Search",
    "Topic :: Text Processing :: Markup :: HTML",
]
dependencies = [
    "html5lib",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["sightline"]

[tool.pytest.ini_options]
addopts = "-ra"
