"""Block-level SHA-256 signatures of byte streams."""

__version__ = "1.0.0"
