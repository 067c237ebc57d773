"""HD wallet module for mnemonic handling and Solana key derivation."""

from jupwallet.hdwallet.mnemonic import (
    WordMatch,
    check_mnemonic_word,
    generate_mnemonic,
    is_valid_mnemonic,
    mnemonic_to_seed,
    normalize_mnemonic,
    validate_mnemonic,
)
from jupwallet.hdwallet.solana import (
    DerivedKey,
    derive_key,
    derive_keypair,
    encode_secret,
    get_address,
    get_derivation_path,
    keypair_from_secret,
)

__all__ = [
    "WordMatch",
    "check_mnemonic_word",
    "generate_mnemonic",
    "is_valid_mnemonic",
    "mnemonic_to_seed",
    "normalize_mnemonic",
    "validate_mnemonic",
    "DerivedKey",
    "derive_key",
    "derive_keypair",
    "encode_secret",
    "get_address",
    "get_derivation_path",
    "keypair_from_secret",
]
