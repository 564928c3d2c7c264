[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "aurorae"
version = "0.1.0"
description = "Simulation toolkit for an autonomous agent: Q-learning, strategic vision, self-replication, NFT collections and security rules"
requires-python = ">=3.10"
keywords = ["reinforcement-learning", "q-learning", "simulation", "agent", "nft"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]
dependencies = [
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[tool.hatch.build.targets.wheel]
packages = ["aurorae"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
