[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "memekit"
version = "0.1.0"
description = "QR code generation, Reed-Solomon coding, packed bit grids and small chain-node helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["qrcode", "reed-solomon", "bitgrid", "two's complement", "scope guard", "blockchain"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["memekit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
