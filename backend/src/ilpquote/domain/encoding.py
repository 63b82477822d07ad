"""
Base64url helpers.

Interledger values travel as base64url text without padding (RFC 4648 §5).
Decoding accepts input with or without padding so that values produced by
other implementations are read the same way.
"""

import base64
import binascii

from .errors import InvalidEncoding


def b64url_encode(data: bytes) -> str:
    """Encode bytes as base64url text with the ``=`` padding removed."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(text: str) -> bytes:
    """
    Decode base64url text, with or without padding.

    Raises:
        InvalidEncoding: If the text is not a string or not decodable
    """
    if not isinstance(text, str):
        raise InvalidEncoding(f"Expected base64url text, got {type(text).__name__}")

    stripped = text.rstrip("=")
    padded = stripped + "=" * (-len(stripped) % 4)
    try:
        return base64.urlsafe_b64decode(padded.encode("ascii"))
    except (binascii.Error, UnicodeEncodeError) as e:
        raise InvalidEncoding(f"Invalid base64url value: {e}") from e


def b64_encode(data: bytes) -> str:
    """Encode bytes as standard (padded) base64 text."""
    return base64.b64encode(data).decode("ascii")
