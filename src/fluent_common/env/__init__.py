"""Environment variable helpers."""

from . import reader

__all__ = ["reader"]
