"""Solana key derivation and import.

Derivation path: m/44'/501'/slot'/0' (all levels hardened, SLIP-10 Ed25519)
Address format: base58 of the raw 32-byte Ed25519 public key, no checksum

Secrets are handled as 64 bytes (32-byte seed followed by the 32-byte public
key), the layout used by Solana CLI and wallet exports.
"""

import logging
from dataclasses import dataclass, field
from typing import Union

import base58
from bip_utils import Bip44, Bip44Changes, Bip44Coins
from solders.keypair import Keypair

from jupwallet.errors import InvalidKeyEncodingError
from jupwallet.hdwallet.mnemonic import mnemonic_to_seed

logger = logging.getLogger(__name__)

SOLANA_COIN_TYPE = 501
SECRET_KEY_LENGTH = 64
SEED_LENGTH = 32
MAX_SLOT = 2**31 - 1

SecretLike = Union[str, bytes, Keypair]


@dataclass(frozen=True)
class DerivedKey:
    """A keypair derived from a mnemonic at one account slot."""

    address: str
    secret: bytes = field(repr=False)  # 64-byte seed || public key
    slot: int
    derivation_path: str


def get_derivation_path(slot: int) -> str:
    """Get the full derivation path for an account slot."""
    return f"m/44'/{SOLANA_COIN_TYPE}'/{slot}'/0'"


def derive_keypair(seed: bytes, slot: int) -> Keypair:
    """Derive the keypair at an account slot from a BIP-39 seed.

    Args:
        seed: 64-byte BIP-39 seed
        slot: Account-level path component (0, 1, 2, ...)

    Returns:
        solders Keypair for m/44'/501'/slot'/0'
    """
    if slot < 0 or slot > MAX_SLOT:
        raise ValueError(f"Derivation slot out of range: {slot}")

    bip44 = Bip44.FromSeed(seed, Bip44Coins.SOLANA)
    account = bip44.Purpose().Coin().Account(slot).Change(Bip44Changes.CHAIN_EXT)
    private_key = account.PrivateKey().Raw().ToBytes()

    # Solana keypair from 32-byte seed
    return Keypair.from_seed(private_key[:SEED_LENGTH])


def derive_key(phrase: str, slot: int, passphrase: str = "") -> DerivedKey:
    """Derive address and secret for a mnemonic at an account slot.

    Raises:
        InvalidMnemonicError: If the phrase is not a valid mnemonic
    """
    seed = mnemonic_to_seed(phrase, passphrase)
    keypair = derive_keypair(seed, slot)
    return DerivedKey(
        address=get_address(keypair),
        secret=bytes(keypair),
        slot=slot,
        derivation_path=get_derivation_path(slot),
    )


def keypair_from_secret(secret: SecretLike) -> Keypair:
    """Build a keypair from a base58 string, 64 raw bytes or a Keypair.

    The trailing 32 bytes must be the public key of the leading 32-byte seed.

    Raises:
        InvalidKeyEncodingError: If decoding fails or the layout is wrong
    """
    if isinstance(secret, Keypair):
        return secret

    if isinstance(secret, str):
        try:
            raw = base58.b58decode(secret.strip())
        except ValueError as e:
            raise InvalidKeyEncodingError(f"Private key is not valid base58: {e}") from e
    else:
        raw = bytes(secret)

    if len(raw) != SECRET_KEY_LENGTH:
        raise InvalidKeyEncodingError(
            f"Private key must be {SECRET_KEY_LENGTH} bytes, got {len(raw)}"
        )

    keypair = Keypair.from_seed(raw[:SEED_LENGTH])
    if bytes(keypair.pubkey()) != raw[SEED_LENGTH:]:
        raise InvalidKeyEncodingError("Public key half does not match the private seed")
    return keypair


def get_address(keypair: Keypair) -> str:
    """Base58 address of a keypair's public key."""
    return str(keypair.pubkey())


def encode_secret(keypair: Keypair) -> str:
    """Base58 export of a keypair's 64-byte secret."""
    return base58.b58encode(bytes(keypair)).decode()
