"""Location reference resolution and spatial utilities."""

__version__ = "0.1.0"
