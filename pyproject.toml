[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "krkrtools"
version = "0.1.2"
description = "Tools for KiriKiri engine files: KSD text scrambling, XP3 archive packing and unpacking, PSB headers"
requires-python = ">=3.10"
dependencies = []
keywords = ["kirikiri", "krkr", "xp3", "ksd", "archive", "psb"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Archiving :: Packaging",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
krkr-descrambler = "krkrtools.descrambler:main"
krkr-scrambler = "krkrtools.scrambler:main"
xp3pack = "krkrtools.xp3pack:main"
xp3unpack = "krkrtools.xp3unpack:main"

[tool.hatch.build.targets.wheel]
packages = ["krkrtools"]

[tool.pytest.ini_options]
addopts = "-ra"
