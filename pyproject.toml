[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "weatherotg"
version = "0.1.0"
description = "Weather helpers: city lookup by IP address, wttr.in reports, forecast formatting and page parameters"
requires-python = ">=3.10"
dependencies = []
keywords = ["weather", "forecast", "wttr", "geoip", "web"]
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
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["weatherotg"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
