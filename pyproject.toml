[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rpsarena"
version = "0.1.0"
description = "Rock-paper-scissors building blocks: players, a computer opponent, LAN hosting and discovery, sprites and a console match loop"
requires-python = ">=3.10"
keywords = ["game", "rock-paper-scissors", "pygame", "multiplayer", "lan"]
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
    "Topic :: Games/Entertainment",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["rpsarena"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
