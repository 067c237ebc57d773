"""Solana wire-transaction signing.

Signing flow:
1. Decode the base64 payload built upstream (legacy or v0 message)
2. Locate the signer's slot among the header's required signers
3. Sign the serialized message with Ed25519
4. Write that one slot, leaving other signers' slots untouched
5. Re-encode as base64

These functions hold no state and need no locking.
"""

import base64
import binascii
import logging

from solders.message import to_bytes_versioned
from solders.transaction import VersionedTransaction

from jupwallet.errors import MalformedPayloadError, SignerMismatchError
from jupwallet.hdwallet.solana import SecretLike, get_address, keypair_from_secret

logger = logging.getLogger(__name__)


def decode_transaction(base64_transaction: str) -> VersionedTransaction:
    """Decode a base64 wire transaction.

    Raises:
        MalformedPayloadError: If the payload is not base64, not a transaction,
            or carries bytes past the end of the transaction
    """
    try:
        raw = base64.b64decode(base64_transaction, validate=True)
    except (binascii.Error, ValueError, TypeError) as e:
        raise MalformedPayloadError(f"Transaction is not valid base64: {e}") from e

    if not raw:
        raise MalformedPayloadError("Transaction payload is empty")

    try:
        tx = VersionedTransaction.from_bytes(raw)
    except (ValueError, TypeError) as e:
        raise MalformedPayloadError(f"Cannot decode transaction: {e}") from e

    if bytes(tx) != raw:
        raise MalformedPayloadError("Transaction has trailing bytes")

    num_required = tx.message.header.num_required_signatures
    if len(tx.signatures) != num_required:
        raise MalformedPayloadError(
            f"Transaction has {len(tx.signatures)} signature slots "
            f"but {num_required} required signers"
        )
    return tx


def required_signers(base64_transaction: str) -> list[str]:
    """List the required signer addresses of a transaction, in slot order."""
    tx = decode_transaction(base64_transaction)
    message = tx.message
    return [str(key) for key in message.account_keys[: message.header.num_required_signatures]]


def sign_transaction(base64_transaction: str, private_key: SecretLike) -> str:
    """Sign a base64 transaction with one key.

    Args:
        base64_transaction: Unsigned (or partially signed) transaction, base64
        private_key: Base58 secret, 64 raw secret bytes, or a solders Keypair

    Returns:
        Base64 transaction with this key's signature slot filled

    Raises:
        InvalidKeyEncodingError: If the private key cannot be decoded
        MalformedPayloadError: If the transaction cannot be decoded
        SignerMismatchError: If the key is not a required signer
    """
    keypair = keypair_from_secret(private_key)
    tx = decode_transaction(base64_transaction)
    message = tx.message

    signers = list(message.account_keys[: message.header.num_required_signatures])
    pubkey = keypair.pubkey()
    if pubkey not in signers:
        raise SignerMismatchError(
            f"{get_address(keypair)} is not a required signer of this transaction"
        )
    slot = signers.index(pubkey)

    signature = keypair.sign_message(to_bytes_versioned(message))

    signatures = list(tx.signatures)
    signatures[slot] = signature
    signed = VersionedTransaction.populate(message, signatures)

    logger.debug(f"Signed transaction slot {slot}/{len(signers)} for {get_address(keypair)}")
    return base64.b64encode(bytes(signed)).decode()
