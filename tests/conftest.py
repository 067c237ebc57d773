"""Pytest configuration and fixtures."""

import base64
import os
from typing import Callable, Optional

import pytest
from solders.hash import Hash
from solders.message import Message, MessageV0
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.system_program import TransferParams, transfer
from solders.transaction import VersionedTransaction

# Set test environment
os.environ["DEBUG"] = "true"
os.environ.pop("WALLET_SEED_PHRASE", None)
os.environ.pop("MASTER_KEY", None)

from jupwallet.config import Settings, get_settings
from jupwallet.wallet import WalletManager


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make every test see a fresh Settings instance."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Settings that ignore any local .env file."""
    return Settings(_env_file=None, keyring_lock_timeout=5.0)


@pytest.fixture
def manager(settings: Settings) -> WalletManager:
    """Empty keyring."""
    wallet_manager = WalletManager(settings)
    wallet_manager.reset_wallet()
    return wallet_manager


@pytest.fixture
def build_unsigned_transaction() -> Callable[..., str]:
    """Factory for base64 SOL transfer transactions with empty signature slots.

    The fee payer is always signer slot 0. When `sender` differs from the
    payer it becomes a second required signer in slot 1.
    """

    def _build(payer: Pubkey, sender: Optional[Pubkey] = None, v0: bool = False) -> str:
        instruction = transfer(
            TransferParams(
                from_pubkey=sender or payer,
                to_pubkey=Pubkey.new_unique(),
                lamports=1_000,
            )
        )
        if v0:
            message = MessageV0.try_compile(payer, [instruction], [], Hash.default())
        else:
            message = Message.new_with_blockhash([instruction], payer, Hash.default())

        slots = [Signature.default()] * message.header.num_required_signatures
        tx = VersionedTransaction.populate(message, slots)
        return base64.b64encode(bytes(tx)).decode()

    return _build
