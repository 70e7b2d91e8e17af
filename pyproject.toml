[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sklaffkom"
version = "0.1.0"
description = "Text, survey and user storage for a simple conference (BBS) system, with a survey-report tool"
requires-python = ">=3.10"
dependencies = []
keywords = ["bbs", "conference", "survey"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: BBS",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sklaff-survreport = "sklaffkom.survreport:main"

[tool.hatch.build.targets.wheel]
packages = ["sklaffkom"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
