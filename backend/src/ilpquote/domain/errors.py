"""
Error types raised by the ILP domain.

Every error is deterministic given its inputs, so none of them is retried.
Each carries a stable ``code`` that the API layer returns to callers.
"""


class IlpError(ValueError):
    """Base class for all ILP calculation errors."""

    code = "ILP_ERROR"


class UnknownCurrency(IlpError):
    """Currency has no entry in the decimal places table."""

    code = "UNKNOWN_CURRENCY"

    def __init__(self, currency: object) -> None:
        super().__init__(f"No decimal place data available for currency {currency}")
        self.currency = currency


class InvalidAmount(IlpError):
    """Amount is malformed, negative, non-finite or out of range."""

    code = "INVALID_AMOUNT"


class NonIntegerAmount(InvalidAmount):
    """Amount has more fractional digits than the currency allows."""

    code = "NON_INTEGER_AMOUNT"


class InvalidParty(IlpError):
    """Party object is missing fields required to build an ILP address."""

    code = "INVALID_PARTY"


class InvalidFulfilmentLength(IlpError):
    """Decoded fulfilment is not exactly 32 bytes."""

    code = "INVALID_FULFILMENT_LENGTH"

    def __init__(self, length: int) -> None:
        super().__init__(
            f"Interledger preimages must be exactly 32 bytes, got {length}"
        )
        self.length = length


class InvalidEncoding(IlpError):
    """Value is not valid base64url text."""

    code = "INVALID_ENCODING"


class InvalidPacket(IlpError):
    """Binary data does not follow the ILP v1 payment packet layout."""

    code = "INVALID_PACKET"
