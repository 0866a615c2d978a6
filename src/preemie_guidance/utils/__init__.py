"""Utility modules for the guidance pipeline."""

from .hashing import cache_key

__all__ = ["cache_key"]
