"""
Attached data carried inside the ILP packet.

The transaction object is serialized as compact JSON, base64url-encoded,
and the ASCII text of that encoding becomes the packet data.
"""

import json
from decimal import Decimal
from typing import Any

from .encoding import b64url_decode, b64url_encode
from .errors import InvalidEncoding
from .models import TransactionSummary


def _json_default(value: Any) -> Any:
    """Serialize Decimal amounts as their exact decimal text."""
    if isinstance(value, Decimal):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class TransactionPayloadEncoder:
    """Encodes transaction summaries to packet data and back."""

    @staticmethod
    def to_json(summary: TransactionSummary) -> str:
        """
        Compact JSON in wire field order, non-ASCII kept as-is.

        Raises:
            InvalidEncoding: If a value has no JSON representation
        """
        try:
            return json.dumps(
                summary.to_wire(),
                separators=(",", ":"),
                ensure_ascii=False,
                allow_nan=False,
                default=_json_default,
            )
        except (TypeError, ValueError) as e:
            raise InvalidEncoding(f"Transaction object is not JSON serializable: {e}") from e

    def encode(self, summary: TransactionSummary) -> bytes:
        """Return the packet data bytes for a transaction summary."""
        encoded = b64url_encode(self.to_json(summary).encode("utf-8"))
        return encoded.encode("ascii")

    def decode(self, data: bytes) -> dict[str, Any]:
        """
        Recover the transaction object from packet data.

        Raises:
            InvalidEncoding: If the data is not base64url-encoded JSON
        """
        try:
            text = data.decode("ascii")
        except UnicodeDecodeError as e:
            raise InvalidEncoding("Packet data is not base64url text") from e

        raw = b64url_decode(text)
        try:
            transaction = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise InvalidEncoding(f"Packet data is not a JSON document: {e}") from e

        if not isinstance(transaction, dict):
            raise InvalidEncoding("Packet data does not hold a transaction object")
        return transaction
