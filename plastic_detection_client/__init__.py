"""Browser client for a remote plastic detection service."""

__version__ = "0.1.0"
