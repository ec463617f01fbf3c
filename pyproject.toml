[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rtfm"
version = "0.2.0"
description = "Terminal browser for man pages and tldr cheatsheets"
requires-python = ">=3.10"
dependencies = []
keywords = ["man", "manual", "tldr", "terminal", "documentation", "tui", "curses"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Environment :: Console :: Curses",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Documentation",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[project.scripts]
rtfm = "rtfm.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["rtfm"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
