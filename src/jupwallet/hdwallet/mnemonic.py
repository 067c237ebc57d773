"""BIP-39 mnemonic helpers.

Generation, validation and word lookups use the trezor `mnemonic` package with
the English wordlist. Seed stretching (PBKDF2-HMAC-SHA512, 2048 rounds) is done
with bip_utils, the same library used for key derivation.
"""

import logging
from enum import Enum

from bip_utils import Bip39SeedGenerator
from mnemonic import Mnemonic

from jupwallet.config import VALID_WORD_COUNTS
from jupwallet.errors import InvalidMnemonicError

logger = logging.getLogger(__name__)

_mnemo = Mnemonic("english")
_wordset = frozenset(_mnemo.wordlist)


class WordMatch(str, Enum):
    """Result of checking a single word against the wordlist."""
    EXACT = "exact"       # Word is in the wordlist
    PARTIAL = "partial"   # Word is a prefix of at least one wordlist entry
    NONE = "none"         # No wordlist entry starts with the word


def normalize_mnemonic(phrase: str) -> str:
    """Lowercase a phrase and collapse whitespace to single spaces."""
    return " ".join(phrase.lower().split())


def generate_mnemonic(word_count: int = 12) -> str:
    """Generate a random mnemonic with a valid checksum.

    Args:
        word_count: Number of words (12, 15, 18, 21 or 24)

    Returns:
        Space-separated lowercase mnemonic sentence
    """
    if word_count not in VALID_WORD_COUNTS:
        raise ValueError(f"word_count must be one of {VALID_WORD_COUNTS}, got {word_count}")
    # 11 bits per word, one checksum bit per 32 bits of entropy
    strength = word_count * 32 // 3
    return _mnemo.generate(strength=strength)


def validate_mnemonic(phrase: str) -> str:
    """Validate a phrase against the wordlist and its checksum.

    Args:
        phrase: Candidate mnemonic sentence

    Returns:
        The normalized phrase

    Raises:
        InvalidMnemonicError: With the positions of unknown words, if any
    """
    normalized = normalize_mnemonic(phrase)
    words = normalized.split(" ") if normalized else []

    if len(words) not in VALID_WORD_COUNTS:
        raise InvalidMnemonicError(
            f"Invalid word count {len(words)}; expected one of {VALID_WORD_COUNTS}"
        )

    invalid_indexes = [i for i, word in enumerate(words) if word not in _wordset]
    if invalid_indexes:
        raise InvalidMnemonicError(
            f"Unknown words at positions {invalid_indexes}",
            invalid_indexes=invalid_indexes,
        )

    if not _mnemo.check(normalized):
        raise InvalidMnemonicError("Mnemonic checksum mismatch")

    return normalized


def is_valid_mnemonic(phrase: str) -> bool:
    """Return True if the phrase passes validate_mnemonic()."""
    try:
        validate_mnemonic(phrase)
    except InvalidMnemonicError:
        return False
    return True


def check_mnemonic_word(word: str) -> WordMatch:
    """Check one word while a user is typing a phrase.

    Returns:
        EXACT for a wordlist word, PARTIAL for a prefix of one, NONE otherwise
    """
    lowercase = word.strip().lower()
    if not lowercase:
        return WordMatch.NONE
    if lowercase in _wordset:
        return WordMatch.EXACT
    if any(w.startswith(lowercase) for w in _mnemo.wordlist):
        return WordMatch.PARTIAL
    return WordMatch.NONE


def mnemonic_to_seed(phrase: str, passphrase: str = "") -> bytes:
    """Stretch a validated mnemonic into a 64-byte BIP-39 seed.

    Raises:
        InvalidMnemonicError: If the phrase is not a valid mnemonic
    """
    normalized = validate_mnemonic(phrase)
    return Bip39SeedGenerator(normalized).Generate(passphrase)
