[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pinktrombone"
version = "0.1.0"
description = "Articulatory voice synthesizer: a glottal source driven through a waveguide model of the vocal and nasal tracts"
requires-python = ">=3.10"
dependencies = []
keywords = ["speech", "synthesis", "vocal tract", "voice", "audio", "dsp", "waveguide"]
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
    "Topic :: Multimedia :: Sound/Audio :: Speech",
    "Topic :: Multimedia :: Sound/Audio :: Sound Synthesis",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pinktrombone"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
