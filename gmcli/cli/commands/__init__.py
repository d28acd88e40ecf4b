"""CLI commands module."""

from . import accounts

__all__ = ["accounts"]
