"""Utility modules for dexgate."""

from dexgate.utils.locks import LockTimeoutError, file_lock, get_path_lock

__all__ = ["LockTimeoutError", "file_lock", "get_path_lock"]
