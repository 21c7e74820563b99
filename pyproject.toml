[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dossierkit"
version = "0.1.0"
description = "Deterministic evidence packs for incident timelines, clinical draft notes and contract risk review"
requires-python = ">=3.10"
dependencies = [
    "idna",
]
keywords = ["incident", "timeline", "redaction", "consent", "contract", "risk", "citations", "determinism"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["dossierkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
