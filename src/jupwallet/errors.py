"""Exceptions raised by the keyring and the transaction signer.

Every error is raised to the caller of the failing operation and leaves the
keyring unchanged. Nothing here is retried.
"""

from typing import Sequence


class WalletError(Exception):
    """Base class for keyring errors."""
    pass


class InvalidMnemonicError(WalletError):
    """Raised when a phrase has unknown words, a bad word count or a bad checksum."""

    def __init__(self, message: str, invalid_indexes: Sequence[int] = ()):
        super().__init__(message)
        self.invalid_indexes = list(invalid_indexes)


class MnemonicAlreadyExistsError(WalletError):
    """Raised when adding a mnemonic while one is already stored."""
    pass


class NoMnemonicError(WalletError):
    """Raised when a derivation is requested and no mnemonic is stored."""
    pass


class InvalidKeyEncodingError(WalletError):
    """Raised when an imported secret is not a valid base58 64-byte keypair."""
    pass


class IndexOutOfRangeError(WalletError, IndexError):
    """Raised when an entry index is outside the stored sequence."""
    pass


class EntryNotFoundError(WalletError, KeyError):
    """Raised when no entry has the requested id."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else ""


class NoCurrentWalletError(WalletError):
    """Raised when the current key is requested and no keys exist."""
    pass


class SigningError(WalletError):
    """Exception raised when signing fails."""
    pass


class SignerMismatchError(SigningError):
    """Raised when the signing key is not a required signer of the transaction."""
    pass


class MalformedPayloadError(SigningError):
    """Raised when the transaction payload cannot be decoded."""
    pass
