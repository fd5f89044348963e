[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "merkleproof"
version = "1.11.1"
description = "Merkle tree with generation and validation of inclusion proofs."
requires-python = ">=3.10"
dependencies = []
keywords = ["merkle", "merkle-tree", "inclusion-proof", "hashing"]
classifiers = [
    "Development Status :: 5 - Production/Stable",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Security :: Cryptography",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["merkleproof"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
