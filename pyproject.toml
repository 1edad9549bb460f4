[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "iconvkit"
version = "0.1.0"
description = "Character set conversion with iconv-style encoding names, options and error semantics"
requires-python = ">=3.10"
dependencies = []
keywords = ["iconv", "encoding", "charset", "codepage", "unicode", "conversion"]
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
    "Topic :: Software Development :: Internationalization",
    "Topic :: Text Processing",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
iconvkit = "iconvkit.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["iconvkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
