"""Concurrency control for file read-modify-write cycles.

Provides per-path locking so two requests editing the same token list cannot
both read the old contents and overwrite each other's changes. Locks are
in-process only.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from dexgate.errors import PersistenceError

logger = logging.getLogger(__name__)

# Global lock registry: resolved path -> asyncio.Lock
_path_locks: dict[str, asyncio.Lock] = {}


class LockTimeoutError(PersistenceError):
    """Raised when a lock cannot be acquired within the timeout period."""

    pass


def get_path_lock(path: str | Path) -> asyncio.Lock:
    """Get or create the lock for a file path.

    Args:
        path: File path; relative paths are resolved so aliases share a lock

    Returns:
        asyncio.Lock for the path
    """
    key = str(Path(path).resolve())
    lock = _path_locks.get(key)
    if lock is None:
        lock = asyncio.Lock()
        _path_locks[key] = lock
    return lock


@asynccontextmanager
async def file_lock(
    path: str | Path,
    timeout: Optional[float] = 30.0,
    operation: str = "file_update",
):
    """Hold exclusive access to a file path for the duration of the block.

    Args:
        path: File being updated
        timeout: Maximum time to wait for the lock (None = wait forever)
        operation: Description for logging

    Example:
        async with file_lock(token_list_path, operation="add_token"):
            # read, modify and write the file here
            pass
    """
    lock = get_path_lock(path)

    try:
        if timeout:
            await asyncio.wait_for(lock.acquire(), timeout=timeout)
        else:
            await lock.acquire()
    except asyncio.TimeoutError:
        logger.warning(f"Lock timeout for {path} after {timeout}s: {operation}")
        raise LockTimeoutError(f"Could not acquire lock for {path} within {timeout}s")

    logger.debug(f"Lock acquired for {path}: {operation}")
    try:
        yield
    finally:
        lock.release()
        logger.debug(f"Lock released for {path}: {operation}")


def clear_path_locks() -> None:
    """Clear all path locks (useful for testing)."""
    _path_locks.clear()
