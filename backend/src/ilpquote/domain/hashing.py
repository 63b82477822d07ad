"""
Crypto-condition hashing for Interledger fulfilments and conditions.

Implements the PREIMAGE-SHA-256 condition type used by ILP v1:
1. Fulfilment: HMAC-SHA-256 of the encoded ILP packet, keyed by a secret
   shared between the two parties of a transfer
2. Condition: SHA-256 of the 32-byte fulfilment

Design Decisions:
- The fulfilment is a pure function of packet and secret; the payee
  regenerates it from the packet instead of storing it
- The HMAC key is the base64 text of the secret bytes
- Condition comparison is constant-time on the canonical base64url text
"""

import hashlib
import hmac

from .encoding import b64_encode, b64url_decode, b64url_encode
from .errors import IlpError, InvalidFulfilmentLength


# PREIMAGE-SHA-256 preimages and digests are both 32 bytes
PREIMAGE_LENGTH = 32


def calculate_fulfilment(encoded_packet: str, secret: bytes) -> str:
    """
    Calculate the fulfilment for an ILP packet.

    Args:
        encoded_packet: The ILP packet as base64url text
        secret: Secret shared with the counterparty

    Returns:
        32-byte fulfilment as base64url text
    """
    key = b64_encode(secret).encode("ascii")
    digest = hmac.new(key, encoded_packet.encode("ascii"), hashlib.sha256).digest()
    return b64url_encode(digest)


def _decode_preimage(fulfilment: str) -> bytes:
    preimage = b64url_decode(fulfilment)
    if len(preimage) != PREIMAGE_LENGTH:
        raise InvalidFulfilmentLength(len(preimage))
    return preimage


def calculate_condition(fulfilment: str) -> str:
    """
    Calculate the condition of a fulfilment.

    Raises:
        InvalidEncoding: If the fulfilment is not base64url
        InvalidFulfilmentLength: If it does not decode to 32 bytes
    """
    preimage = _decode_preimage(fulfilment)
    return b64url_encode(hashlib.sha256(preimage).digest())


def verify_fulfilment(fulfilment: str, condition: str) -> bool:
    """
    Check a fulfilment against a previously issued condition.

    The condition must be the canonical encoding: unpadded base64url of
    the digest. Never raises for bad input: anything that is not a 32-byte
    fulfilment matching the condition is simply invalid.
    """
    if not isinstance(condition, str) or not condition.isascii():
        return False
    try:
        preimage = _decode_preimage(fulfilment)
    except IlpError:
        return False

    actual = b64url_encode(hashlib.sha256(preimage).digest())
    return hmac.compare_digest(actual, condition)
