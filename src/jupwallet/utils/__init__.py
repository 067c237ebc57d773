"""Utility modules for jupwallet."""

from jupwallet.utils.locks import KeyringLock, LockTimeoutError
from jupwallet.utils.log import configure_logging

__all__ = ["KeyringLock", "LockTimeoutError", "configure_logging"]
