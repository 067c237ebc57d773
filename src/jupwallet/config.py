"""Library configuration using pydantic-settings.

Everything here is optional: a WalletManager works with the defaults and no
environment at all. Setting WALLET_SEED_PHRASE lets WalletManager.from_settings()
restore a wallet on startup.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_WORD_COUNTS = (12, 15, 18, 21, 24)


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Runtime
    # ======================
    debug: bool = Field(default=False, description="Enable debug logging")

    # ======================
    # Wallet
    # ======================
    wallet_seed_phrase: Optional[str] = Field(
        default=None, description="BIP-39 seed phrase to load on startup"
    )
    wallet_passphrase: str = Field(
        default="", description="Optional BIP-39 passphrase (the '25th word')"
    )
    mnemonic_word_count: int = Field(
        default=12, description="Word count for newly generated mnemonics"
    )

    # ======================
    # Secret handling
    # ======================
    master_key: Optional[str] = Field(
        default=None,
        description="Fernet key used to seal secrets in memory (random per manager if unset)",
    )
    keyring_lock_timeout: float = Field(
        default=10.0, description="Seconds to wait for the keyring lock"
    )

    @field_validator("mnemonic_word_count")
    @classmethod
    def _check_word_count(cls, value: int) -> int:
        if value not in VALID_WORD_COUNTS:
            raise ValueError(f"mnemonic_word_count must be one of {VALID_WORD_COUNTS}")
        return value

    @property
    def has_wallet(self) -> bool:
        """Check if a seed phrase is configured."""
        return bool(self.wallet_seed_phrase and len(self.wallet_seed_phrase.split()) >= 12)

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "debug": self.debug,
            "wallet_configured": self.has_wallet,
            "wallet_passphrase": "***" if self.wallet_passphrase else "(not set)",
            "mnemonic_word_count": self.mnemonic_word_count,
            "master_key": "***" if self.master_key else "(ephemeral)",
            "keyring_lock_timeout": self.keyring_lock_timeout,
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
