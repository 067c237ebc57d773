"""Concurrency control for keyring state.

Provides the monitor lock that serializes every WalletManager operation, so no
two mutations interleave and readers never see a half-applied change. The lock
is a plain threading.Lock: keyring operations never await or do I/O while
holding it, so it is safe to share between threads and asyncio tasks alike.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

logger = logging.getLogger(__name__)


class LockTimeoutError(Exception):
    """Raised when a lock cannot be acquired within the timeout period."""

    pass


class KeyringLock:
    """Context manager for exclusive access to one keyring's state.

    Example:
        lock = KeyringLock(timeout=5.0)
        with lock.hold("add_mnemonic"):
            # read and mutate keyring state
            ...
    """

    def __init__(self, timeout: Optional[float] = 10.0):
        """Initialize the lock.

        Args:
            timeout: Maximum time to wait for the lock (None = wait forever)
        """
        self.timeout = timeout
        self._lock = threading.Lock()

    def locked(self) -> bool:
        """Return True while some operation holds the lock."""
        return self._lock.locked()

    @contextmanager
    def hold(self, operation: str = "keyring_operation") -> Iterator[None]:
        """Hold the lock for the duration of the block.

        Args:
            operation: Description of the operation for logging

        Raises:
            LockTimeoutError: If the lock is not acquired within the timeout
        """
        if self.timeout is None:
            acquired = self._lock.acquire()
        else:
            acquired = self._lock.acquire(timeout=self.timeout)

        if not acquired:
            logger.warning(f"Keyring lock timeout after {self.timeout}s: {operation}")
            raise LockTimeoutError(
                f"Could not acquire keyring lock within {self.timeout}s ({operation})"
            )

        logger.debug(f"Keyring lock acquired: {operation}")
        try:
            yield
        finally:
            self._lock.release()
            logger.debug(f"Keyring lock released: {operation}")
