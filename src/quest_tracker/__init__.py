"""Discord quest tracker command-line tool."""

__version__ = "1.0.0"

__all__ = ["__version__"]
