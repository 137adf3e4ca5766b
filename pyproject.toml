[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "vmsim"
version = "0.1.0"
description = "Trace-driven simulator of paged virtual memory with swap and page replacement policies"
requires-python = ">=3.10"
dependencies = []
keywords = ["virtual memory", "paging", "page replacement", "simulator", "operating systems"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
vm-sim = "vmsim.cli:main"

[tool.setuptools.packages.find]
include = ["vmsim*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
