[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "goldsync"
version = "0.1.0"
description = "Point a simulation project's nc.tcl copy commands and Makefile SYSRTEMP at locally collected gold-file results"
requires-python = ">=3.10"
dependencies = []
keywords = ["makefile", "tcl", "simulation", "golden files", "regression", "build"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
goldsync = "goldsync.direct:main"
goldsync-results = "goldsync.results:main"
goldsync-dumps = "goldsync.dumps:main"

[tool.hatch.build.targets.wheel]
packages = ["goldsync"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"
