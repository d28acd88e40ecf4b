"""Persistent storage for gmcli accounts and credentials."""

from .accounts import AccountStorage, resolve_account

__all__ = ["AccountStorage", "resolve_account"]
