"""Keyring entry models.

Entries are frozen; the manager replaces them instead of mutating, so a
snapshot handed to a caller never changes underneath it. Secret material is
held only as a sealed token (see jupwallet.crypto) and is kept out of repr.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from jupwallet.hdwallet.solana import get_derivation_path


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class MnemonicEntry:
    """A stored mnemonic and its derivation counter.

    Attributes:
        id: Unique entry id
        encrypted_data: Sealed mnemonic phrase
        created_at: Insertion time (UTC)
        generated_address_count: Next unused account slot for this mnemonic
    """

    id: UUID = field(default_factory=uuid4)
    encrypted_data: str = field(default="", repr=False)
    created_at: datetime = field(default_factory=_utcnow)
    generated_address_count: int = 0


@dataclass(frozen=True)
class PrivateKeyEntry:
    """A stored signing key.

    Attributes:
        id: Unique entry id
        address: Base58 public key
        encrypted_data: Sealed 64-byte secret
        source_mnemonic_id: Mnemonic this key was derived from, None if imported
        derivation_slot: Account slot used for derivation, None if imported
        created_at: Insertion time (UTC)
    """

    address: str
    encrypted_data: str = field(repr=False)
    id: UUID = field(default_factory=uuid4)
    source_mnemonic_id: Optional[UUID] = None
    derivation_slot: Optional[int] = None
    created_at: datetime = field(default_factory=_utcnow)

    @property
    def is_imported(self) -> bool:
        return self.source_mnemonic_id is None

    @property
    def derivation_path(self) -> Optional[str]:
        if self.derivation_slot is None:
            return None
        return get_derivation_path(self.derivation_slot)


@dataclass
class WalletData:
    """Complete keyring state owned by one WalletManager."""

    mnemonics: list[MnemonicEntry] = field(default_factory=list)
    private_keys: list[PrivateKeyEntry] = field(default_factory=list)
    current_wallet_index: int = 0
