[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "oceanclient"
version = "0.1.0"
description = "A small client library for a cloud provider's v2 REST API: regions, sizes, snapshots, load balancers, VPCs, projects and block storage."
requires-python = ">=3.10"
dependencies = []
keywords = ["cloud", "api", "client", "rest", "load-balancer", "vpc", "storage"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Internet :: WWW/HTTP",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["oceanclient"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
