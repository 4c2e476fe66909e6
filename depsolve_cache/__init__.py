"""Metadata caching for repository depsolving."""

__version__ = "0.1.0"
