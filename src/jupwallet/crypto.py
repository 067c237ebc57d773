"""In-memory sealing of secret material.

Uses Fernet (AES-128-CBC with HMAC) for symmetric encryption. Keyring entries
keep their mnemonic or private key only as a Fernet token, so a stray repr or
log line never carries raw secrets. Nothing is written to disk.
"""

import logging
from typing import Optional

from cryptography.fernet import Fernet

logger = logging.getLogger(__name__)


def generate_master_key() -> str:
    """Generate a new master encryption key.

    Returns:
        Base64-encoded 32-byte key suitable for Fernet
    """
    return Fernet.generate_key().decode()


class SecretSealer:
    """Seals and unseals secret bytes with a Fernet key.

    Usage:
        sealer = SecretSealer()
        token = sealer.seal(b"secret")
        assert sealer.unseal(token) == b"secret"
    """

    def __init__(self, master_key: Optional[str] = None):
        """Initialize with a master encryption key.

        Args:
            master_key: Base64-encoded Fernet key. A random key is generated
                when omitted, so tokens are only readable by this instance.
        """
        if master_key is None:
            master_key = generate_master_key()
            logger.debug("Using ephemeral sealing key")
        self._fernet = Fernet(master_key.encode())

    def seal(self, secret: bytes) -> str:
        """Encrypt secret bytes.

        Args:
            secret: Raw secret material

        Returns:
            Fernet token string
        """
        return self._fernet.encrypt(secret).decode()

    def unseal(self, token: str) -> bytes:
        """Decrypt a token produced by seal().

        Raises:
            InvalidToken: If the token was sealed with another key or is corrupted
        """
        return self._fernet.decrypt(token.encode())
