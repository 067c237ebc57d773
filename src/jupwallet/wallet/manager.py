"""Wallet manager: the in-memory Solana keyring.

Holds at most one mnemonic plus an append-only list of private keys, derives
new keys from the mnemonic, tracks the "current" key and signs transactions
with it.

Derivation slots vs. selectors:
    derive_and_add_private_key_at(index) uses `index` only to pick the
    mnemonic. The account slot comes from the mnemonic's own counter
    (generated_address_count), so repeated calls with the same index yield new
    addresses. add_mnemonic() consumes slot 0 immediately.

Every public method runs under one KeyringLock, so callers on several threads
or tasks may share a manager without their own locking. Failed operations
leave the state untouched: everything is validated and derived before the
first mutation.

Security: mnemonics and private keys are sealed in memory and never logged.
Only get_mnemonic*, get_private_key_base58 and get_current_private_key return
raw secrets.
"""

import logging
from dataclasses import replace
from typing import Optional, Sequence, TypeVar, Union
from uuid import UUID

from jupwallet.config import Settings, get_settings
from jupwallet.crypto import SecretSealer
from jupwallet.errors import (
    EntryNotFoundError,
    IndexOutOfRangeError,
    MnemonicAlreadyExistsError,
    NoCurrentWalletError,
    NoMnemonicError,
)
from jupwallet.hdwallet.mnemonic import generate_mnemonic, validate_mnemonic
from jupwallet.hdwallet.solana import (
    derive_key,
    encode_secret,
    get_address,
    keypair_from_secret,
)
from jupwallet.signing.transaction import sign_transaction
from jupwallet.utils.locks import KeyringLock
from jupwallet.wallet.models import MnemonicEntry, PrivateKeyEntry, WalletData

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _as_entry_id(entry_id: Union[UUID, str], kind: str) -> UUID:
    if isinstance(entry_id, UUID):
        return entry_id
    try:
        return UUID(str(entry_id))
    except ValueError as e:
        raise EntryNotFoundError(f"{kind} {entry_id} not found") from e


def _entry_at(entries: Sequence[T], index: int, kind: str) -> T:
    if index < 0 or index >= len(entries):
        raise IndexOutOfRangeError(
            f"{kind} index {index} out of range (have {len(entries)})"
        )
    return entries[index]


class WalletManager:
    """Stateful keyring for one mnemonic and any number of keys.

    Usage:
        manager = WalletManager()
        manager.add_mnemonic("rival pledge marriage ...")
        manager.derive_and_add_private_key_at(0)
        manager.set_current_wallet_at_index(1)
        signed = manager.sign_transaction(unsigned_b64)
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        sealer: Optional[SecretSealer] = None,
    ):
        """Initialize an empty keyring.

        Args:
            settings: Settings to use (defaults to get_settings())
            sealer: Secret sealer (defaults to one keyed by settings.master_key)
        """
        self.settings = settings or get_settings()
        self._sealer = sealer or SecretSealer(self.settings.master_key)
        self._lock = KeyringLock(timeout=self.settings.keyring_lock_timeout)
        self._wallet = WalletData()

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "WalletManager":
        """Create a manager and load WALLET_SEED_PHRASE if configured."""
        settings = settings or get_settings()
        manager = cls(settings)
        if settings.wallet_seed_phrase:
            entry = manager.add_mnemonic(settings.wallet_seed_phrase)
            logger.info(f"Loaded configured mnemonic {entry.id}")
        return manager

    # ---- Lifecycle -----------------------------------------------------------

    def reset_wallet(self) -> None:
        """Drop all mnemonics and keys and reset the current index."""
        with self._lock.hold("reset_wallet"):
            self._wallet = WalletData()
        logger.info("Wallet reset")

    def generate_mnemonic(self, word_count: Optional[int] = None) -> str:
        """Generate a fresh mnemonic without storing it."""
        return generate_mnemonic(word_count or self.settings.mnemonic_word_count)

    def add_mnemonic(self, phrase: str) -> MnemonicEntry:
        """Store a mnemonic and derive its first key at slot 0.

        Args:
            phrase: BIP-39 English mnemonic

        Returns:
            The stored MnemonicEntry (its counter is already 1)

        Raises:
            InvalidMnemonicError: If the phrase fails word or checksum checks
            MnemonicAlreadyExistsError: If a mnemonic is already stored
        """
        normalized = validate_mnemonic(phrase)
        with self._lock.hold("add_mnemonic"):
            return self._add_mnemonic(normalized)

    def generate_mnemonic_for_wallet(self, word_count: Optional[int] = None) -> MnemonicEntry:
        """Generate a mnemonic and store it as with add_mnemonic()."""
        phrase = self.generate_mnemonic(word_count)
        with self._lock.hold("generate_mnemonic_for_wallet"):
            return self._add_mnemonic(phrase)

    def _add_mnemonic(self, normalized: str) -> MnemonicEntry:
        if self._wallet.mnemonics:
            raise MnemonicAlreadyExistsError(
                "A mnemonic is already stored; call reset_wallet() before adding another"
            )

        entry = MnemonicEntry(encrypted_data=self._sealer.seal(normalized.encode()))
        key_entry = self._derive_entry(entry, normalized, slot=0)
        entry = replace(entry, generated_address_count=1)

        self._wallet.mnemonics.append(entry)
        self._wallet.private_keys.append(key_entry)
        logger.info(f"Added mnemonic {entry.id}, first address {key_entry.address}")
        return entry

    def add_private_key(self, private_key_base58: str) -> PrivateKeyEntry:
        """Import a base58 64-byte secret key.

        Raises:
            InvalidKeyEncodingError: If the secret cannot be decoded
        """
        keypair = keypair_from_secret(private_key_base58)
        entry = PrivateKeyEntry(
            address=get_address(keypair),
            encrypted_data=self._sealer.seal(bytes(keypair)),
        )
        with self._lock.hold("add_private_key"):
            self._wallet.private_keys.append(entry)
        logger.info(f"Imported private key for {entry.address}")
        return entry

    def derive_and_add_private_key_at(self, index: int) -> PrivateKeyEntry:
        """Derive the next key from the mnemonic at `index` and store it.

        `index` selects the mnemonic; the derivation slot is that mnemonic's
        counter, which is incremented afterwards.

        Raises:
            NoMnemonicError: If no mnemonic is stored
            IndexOutOfRangeError: If `index` does not select a stored mnemonic
        """
        with self._lock.hold("derive_and_add_private_key_at"):
            if not self._wallet.mnemonics:
                raise NoMnemonicError("No mnemonic stored; add one before deriving keys")
            entry = _entry_at(self._wallet.mnemonics, index, "Mnemonic")
            phrase = self._sealer.unseal(entry.encrypted_data).decode()

            slot = entry.generated_address_count
            key_entry = self._derive_entry(entry, phrase, slot=slot)

            self._wallet.mnemonics[index] = replace(entry, generated_address_count=slot + 1)
            self._wallet.private_keys.append(key_entry)
        logger.info(f"Derived {key_entry.address} at slot {slot} from mnemonic {entry.id}")
        return key_entry

    def _derive_entry(self, entry: MnemonicEntry, phrase: str, slot: int) -> PrivateKeyEntry:
        derived = derive_key(phrase, slot, self.settings.wallet_passphrase)
        return PrivateKeyEntry(
            address=derived.address,
            encrypted_data=self._sealer.seal(derived.secret),
            source_mnemonic_id=entry.id,
            derivation_slot=derived.slot,
        )

    # ---- Lookups -------------------------------------------------------------

    def get_mnemonic_entry_array(self) -> list[MnemonicEntry]:
        with self._lock.hold("get_mnemonic_entry_array"):
            return list(self._wallet.mnemonics)

    def get_mnemonic_entry_at_index(self, index: int) -> MnemonicEntry:
        with self._lock.hold("get_mnemonic_entry_at_index"):
            return _entry_at(self._wallet.mnemonics, index, "Mnemonic")

    def get_private_keys_entry(self) -> list[PrivateKeyEntry]:
        with self._lock.hold("get_private_keys_entry"):
            return list(self._wallet.private_keys)

    def get_private_keys_entry_at_index(self, index: int) -> PrivateKeyEntry:
        with self._lock.hold("get_private_keys_entry_at_index"):
            return _entry_at(self._wallet.private_keys, index, "Private key")

    def get_mnemonic(self, entry_id: Union[UUID, str]) -> str:
        """Return the phrase of a mnemonic entry. Sensitive.

        Args:
            entry_id: Entry id, as a UUID or its string form

        Raises:
            EntryNotFoundError: If no mnemonic has this id
        """
        entry_id = _as_entry_id(entry_id, "Mnemonic")
        with self._lock.hold("get_mnemonic"):
            for entry in self._wallet.mnemonics:
                if entry.id == entry_id:
                    return self._sealer.unseal(entry.encrypted_data).decode()
        raise EntryNotFoundError(f"Mnemonic {entry_id} not found")

    def get_mnemonic_at_index(self, index: int) -> str:
        """Return the phrase of the mnemonic at `index`. Sensitive."""
        with self._lock.hold("get_mnemonic_at_index"):
            entry = _entry_at(self._wallet.mnemonics, index, "Mnemonic")
            return self._sealer.unseal(entry.encrypted_data).decode()

    def get_private_key_base58(self, entry_id: Union[UUID, str]) -> str:
        """Return the base58 64-byte secret of a key entry. Sensitive.

        Args:
            entry_id: Entry id, as a UUID or its string form

        Raises:
            EntryNotFoundError: If no key has this id
        """
        entry_id = _as_entry_id(entry_id, "Private key")
        with self._lock.hold("get_private_key_base58"):
            for entry in self._wallet.private_keys:
                if entry.id == entry_id:
                    return self._export(entry)
        raise EntryNotFoundError(f"Private key {entry_id} not found")

    def _export(self, entry: PrivateKeyEntry) -> str:
        return encode_secret(keypair_from_secret(self._sealer.unseal(entry.encrypted_data)))

    # ---- Current wallet ------------------------------------------------------

    def set_current_wallet_at_index(self, index: int) -> None:
        """Select the key used by the get_current_* methods and signing.

        Raises:
            IndexOutOfRangeError: If `index` is not a stored key index
        """
        with self._lock.hold("set_current_wallet_at_index"):
            entry = _entry_at(self._wallet.private_keys, index, "Private key")
            self._wallet.current_wallet_index = index
        logger.info(f"Current wallet set to index {index} ({entry.address})")

    def get_current_wallet_index(self) -> int:
        with self._lock.hold("get_current_wallet_index"):
            return self._wallet.current_wallet_index

    def get_current_private_key_entry(self) -> PrivateKeyEntry:
        """Return the selected key entry.

        Raises:
            NoCurrentWalletError: If no keys are stored
        """
        with self._lock.hold("get_current_private_key_entry"):
            return self._current_entry()

    def _current_entry(self) -> PrivateKeyEntry:
        if not self._wallet.private_keys:
            raise NoCurrentWalletError("No private keys stored")
        return self._wallet.private_keys[self._wallet.current_wallet_index]

    def get_current_address(self) -> str:
        """Return the address of the selected key."""
        with self._lock.hold("get_current_address"):
            return self._current_entry().address

    def get_current_private_key(self) -> str:
        """Return the base58 secret of the selected key. Sensitive."""
        with self._lock.hold("get_current_private_key"):
            return self._export(self._current_entry())

    # ---- Signing -------------------------------------------------------------

    def sign_transaction(self, base64_transaction: str) -> str:
        """Sign a base64 transaction with the selected key.

        Raises:
            NoCurrentWalletError: If no keys are stored
            MalformedPayloadError: If the transaction cannot be decoded
            SignerMismatchError: If the selected key is not a required signer
        """
        with self._lock.hold("sign_transaction"):
            secret = self._sealer.unseal(self._current_entry().encrypted_data)
        return sign_transaction(base64_transaction, secret)
