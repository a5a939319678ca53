[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "troutwsgi"
version = "2.0.0"
description = "An opinionated trie-based URL router for WSGI applications that tells 404 apart from 405"
requires-python = ">=3.10"
dependencies = []
keywords = ["wsgi", "router", "routing", "trie", "rest", "http"]
classifiers = [
    "Development Status :: 5 - Production/Stable",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Middleware",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["troutwsgi"]

[tool.pytest.ini_options]
addopts = "-ra"
