"""Keyring: mnemonic and private-key entries, derivation and the current key."""

from jupwallet.wallet.manager import WalletManager
from jupwallet.wallet.models import MnemonicEntry, PrivateKeyEntry, WalletData

__all__ = [
    "WalletManager",
    "MnemonicEntry",
    "PrivateKeyEntry",
    "WalletData",
]
