"""Reusable design patterns."""

from .singleton import Singleton

__all__ = ["Singleton"]
