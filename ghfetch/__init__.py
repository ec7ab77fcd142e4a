"""Clone or update every repository of a GitHub organization."""

__version__ = "0.3.0"
