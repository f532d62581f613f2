[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gherkinkit"
version = "0.1.0"
description = "Build Gherkin document trees from parser events, render them as JSON and compile them into pickles"
requires-python = ">=3.10"
dependencies = []
keywords = ["gherkin", "bdd", "cucumber", "pickles", "ast"]
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
    "Topic :: Software Development :: Testing :: BDD",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gherkinkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
