[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "trecmeasures"
version = "0.1.0"
description = "Per-topic ranked retrieval evaluation measures in the TREC style (precision, MAP, bpref, nDCG, gain and preference measures) and a reader for z-score reference files."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "information retrieval",
    "evaluation",
    "trec",
    "map",
    "ndcg",
    "bpref",
    "precision",
    "relevance",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Information Analysis",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["trecmeasures"]

[tool.hatch.build.targets.sdist]
include = ["trecmeasures", "tests", "README.md"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
