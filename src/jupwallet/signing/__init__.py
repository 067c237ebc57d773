"""Transaction signing for externally built Solana transactions."""

from jupwallet.signing.transaction import (
    decode_transaction,
    required_signers,
    sign_transaction,
)

__all__ = [
    "decode_transaction",
    "required_signers",
    "sign_transaction",
]
