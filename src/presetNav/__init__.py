"""Folders, favorites and bulk organization over a host-owned preset list."""

__version__ = "0.1.0"
