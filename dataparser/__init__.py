"""Configurable binary parsing and serialization over buffers, streams and async writers."""

__version__ = "0.1.0"