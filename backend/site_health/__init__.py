"""Hotel website health scoring service."""

__version__ = "0.1.0"
