"""jupwallet - in-memory Solana keyring and transaction signer."""

from jupwallet.errors import (
    EntryNotFoundError,
    IndexOutOfRangeError,
    InvalidKeyEncodingError,
    InvalidMnemonicError,
    MalformedPayloadError,
    MnemonicAlreadyExistsError,
    NoCurrentWalletError,
    NoMnemonicError,
    SignerMismatchError,
    SigningError,
    WalletError,
)
from jupwallet.hdwallet.mnemonic import generate_mnemonic
from jupwallet.signing.transaction import sign_transaction
from jupwallet.wallet import MnemonicEntry, PrivateKeyEntry, WalletManager

__version__ = "0.1.0"

__all__ = [
    "WalletManager",
    "MnemonicEntry",
    "PrivateKeyEntry",
    "generate_mnemonic",
    "sign_transaction",
    "WalletError",
    "InvalidMnemonicError",
    "MnemonicAlreadyExistsError",
    "NoMnemonicError",
    "InvalidKeyEncodingError",
    "IndexOutOfRangeError",
    "EntryNotFoundError",
    "NoCurrentWalletError",
    "SigningError",
    "SignerMismatchError",
    "MalformedPayloadError",
]
