"""Component tests for configuration, locking, sealing and logging."""

import logging
import threading

import pytest
from cryptography.fernet import InvalidToken
from pydantic import ValidationError

from jupwallet.config import Settings, get_settings
from jupwallet.crypto import SecretSealer, generate_master_key
from jupwallet.utils.locks import KeyringLock, LockTimeoutError
from jupwallet.utils.log import configure_logging


class TestKeyringLock:
    """Tests for the keyring monitor lock."""

    def test_hold_acquires_and_releases(self):
        """Test KeyringLock.hold as a context manager."""
        lock = KeyringLock(timeout=1.0)

        with lock.hold("test"):
            assert lock.locked()

        assert not lock.locked()

    def test_released_on_exception(self):
        """Test that errors inside the block still release the lock."""
        lock = KeyringLock(timeout=1.0)

        with pytest.raises(RuntimeError):
            with lock.hold("test"):
                raise RuntimeError("boom")

        assert not lock.locked()

    def test_lock_timeout_raises_error(self):
        """Test that a held lock times out instead of blocking forever."""
        lock = KeyringLock(timeout=0.05)
        holding = threading.Event()
        release = threading.Event()

        def hold_lock():
            with lock.hold("holder"):
                holding.set()
                release.wait(5)

        holder = threading.Thread(target=hold_lock)
        holder.start()
        holding.wait(5)
        try:
            with pytest.raises(LockTimeoutError):
                with lock.hold("waiter"):
                    pass
        finally:
            release.set()
            holder.join()

        assert not lock.locked()

    def test_serializes_threads(self):
        """Test that two threads never run inside the lock together."""
        lock = KeyringLock(timeout=5.0)
        results = []

        def task(name):
            with lock.hold(f"task_{name}"):
                results.append(f"{name}_start")
                threading.Event().wait(0.05)
                results.append(f"{name}_end")

        threads = [threading.Thread(target=task, args=(n,)) for n in ("A", "B")]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results in [
            ["A_start", "A_end", "B_start", "B_end"],
            ["B_start", "B_end", "A_start", "A_end"],
        ]

    def test_no_timeout(self):
        """Test that timeout=None waits without a limit."""
        lock = KeyringLock(timeout=None)

        with lock.hold():
            assert lock.locked()


class TestSecretSealer:
    """Tests for in-memory secret sealing."""

    def test_round_trip(self):
        """Test that sealed bytes come back unchanged."""
        sealer = SecretSealer()

        token = sealer.seal(b"secret material")

        assert token != "secret material"
        assert sealer.unseal(token) == b"secret material"

    def test_configured_key(self):
        """Test that two sealers sharing a key can read each other's tokens."""
        key = generate_master_key()

        token = SecretSealer(key).seal(b"shared")

        assert SecretSealer(key).unseal(token) == b"shared"

    def test_other_key_cannot_unseal(self):
        """Test that ephemeral keys isolate instances."""
        token = SecretSealer().seal(b"private")

        with pytest.raises(InvalidToken):
            SecretSealer().unseal(token)


class TestSettings:
    """Tests for configuration."""

    def test_defaults(self):
        """Test default settings values."""
        settings = Settings(_env_file=None)

        assert settings.mnemonic_word_count == 12
        assert settings.wallet_passphrase == ""
        assert settings.master_key is None
        assert not settings.has_wallet

    def test_environment_variables(self, monkeypatch):
        """Test loading from the environment."""
        monkeypatch.setenv("MNEMONIC_WORD_COUNT", "24")
        monkeypatch.setenv("DEBUG", "false")

        settings = get_settings()

        assert settings.mnemonic_word_count == 24
        assert settings.debug is False

    def test_invalid_word_count(self):
        """Test that unsupported word counts are rejected."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, mnemonic_word_count=13)

    def test_safe_dict_redacts_secrets(self):
        """Test that get_safe_dict never contains secrets."""
        phrase = "rival pledge marriage dove vicious okay ethics answer transfer link pave whip"
        master_key = generate_master_key()
        settings = Settings(
            _env_file=None,
            wallet_seed_phrase=phrase,
            wallet_passphrase="hunter2",
            master_key=master_key,
        )

        data = settings.get_safe_dict()

        assert data["wallet_configured"] is True
        assert data["wallet_passphrase"] == "***"
        assert data["master_key"] == "***"
        assert set(data) == {
            "debug",
            "wallet_configured",
            "wallet_passphrase",
            "mnemonic_word_count",
            "master_key",
            "keyring_lock_timeout",
        }
        flattened = repr(data)
        assert "rival" not in flattened
        assert "hunter2" not in flattened
        assert master_key not in flattened


class TestLogging:
    """Tests for logging setup."""

    def test_debug_level(self):
        """Test that debug settings enable DEBUG logging."""
        level = configure_logging(Settings(_env_file=None, debug=True))

        assert level == logging.DEBUG
        assert logging.getLogger("jupwallet").level == logging.DEBUG

    def test_info_level(self):
        """Test the non-debug level."""
        level = configure_logging(Settings(_env_file=None, debug=False))

        assert level == logging.INFO
        assert logging.getLogger("jupwallet").level == logging.INFO

    def test_secrets_never_logged(self, manager, caplog):
        """Test that keyring logging leaves out mnemonics and secrets."""
        phrase = "rival pledge marriage dove vicious okay ethics answer transfer link pave whip"

        with caplog.at_level(logging.DEBUG, logger="jupwallet"):
            manager.add_mnemonic(phrase)
            secret = manager.get_current_private_key()

        assert "9pMbqzoZJxSpaMtMJ9zaJqxY75K8esjL43WMTCnNCj1r" in caplog.text
        assert "rival" not in caplog.text
        assert secret not in caplog.text
