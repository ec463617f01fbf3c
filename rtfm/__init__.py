"""Terminal browser and library for man pages and tldr cheatsheets."""

__version__ = "0.2.0"

__all__ = ["__version__"]