[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "brokerapi"
version = "13.0.0"
description = "Building blocks for Open Service Broker API services: catalog models, broker interface, response bodies, failure responses and WSGI basic-auth middleware"
requires-python = ">=3.10"
dependencies = []
keywords = ["open service broker", "service broker", "osbapi", "wsgi", "basic auth"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Middleware",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["brokerapi"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
