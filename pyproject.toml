[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "coffeetimer"
version = "0.1.0"
description = "Switch a coffee machine on at a set time each day through a small HTTP API and a GPIO pulse"
requires-python = ">=3.10"
keywords = ["coffee", "timer", "gpio", "sysfs", "flask", "home-automation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Home Automation",
]
dependencies = [
    "flask",
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
coffeetimer = "coffeetimer.server:main"

[tool.hatch.build.targets.wheel]
packages = ["coffeetimer"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
