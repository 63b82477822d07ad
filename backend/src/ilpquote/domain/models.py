"""
Domain models for ILP quote-response calculations.

These models represent the values flowing through one artifact computation.
Everything except IlpArtifact is built and consumed inside a single call.

Design Decisions:
- Using dataclasses for immutable, typed domain objects
- Decimal for all monetary values to avoid floating-point errors
- Parties are carried as received so the attached data keeps the
  Mojaloop party shape that downstream decoders expect
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from .errors import InvalidAmount, InvalidParty


@dataclass(frozen=True)
class Money:
    """
    A monetary amount in a given currency.

    The amount keeps the exact decimal digits supplied by the caller.
    """
    currency: str
    amount: Decimal

    @classmethod
    def from_mapping(cls, value: Mapping[str, Any]) -> "Money":
        """Build from a Mojaloop money object ``{"currency", "amount"}``."""
        if not isinstance(value, Mapping):
            raise InvalidAmount("Money must be an object with currency and amount")

        currency = value.get("currency")
        raw_amount = value.get("amount")
        if isinstance(raw_amount, float):
            # floats have already lost the decimal digits
            raw_amount = repr(raw_amount)
        try:
            amount = Decimal(str(raw_amount)) if raw_amount is not None else None
        except InvalidOperation:
            amount = None
        if amount is None:
            raise InvalidAmount(f"Invalid amount value: {raw_amount!r}")

        return cls(currency=currency, amount=amount)


@dataclass(frozen=True)
class PartyIdentity:
    """
    The identity fields of a party needed to build its ILP address.

    Type and identifier are case-insensitive and lowercased on use.
    """
    fsp_id: str
    party_id_type: str
    party_identifier: str

    @classmethod
    def from_party(cls, party: Any) -> "PartyIdentity":
        """
        Extract the identity from a Mojaloop party object.

        Raises:
            InvalidParty: If the party or any required field is missing
        """
        if not isinstance(party, Mapping):
            raise InvalidParty("ILP party must be an object")

        info = party.get("partyIdInfo")
        if not isinstance(info, Mapping):
            raise InvalidParty("ILP party does not contain required partyIdInfo object")

        for key in ("fspId", "partyIdType", "partyIdentifier"):
            value = info.get(key)
            if not isinstance(value, str) or not value:
                raise InvalidParty(
                    f"ILP party does not contain required partyIdInfo.{key} string value"
                )

        return cls(
            fsp_id=info["fspId"],
            party_id_type=info["partyIdType"],
            party_identifier=info["partyIdentifier"],
        )


@dataclass(frozen=True)
class TransactionSummary:
    """
    The transaction object attached to an ILP packet.

    Field order here is the order of the serialized JSON and is part of
    the wire contract.
    """
    transaction_id: str
    quote_id: str
    payee: Mapping[str, Any]
    payer: Mapping[str, Any]
    amount: Mapping[str, Any]
    transaction_type: Any
    note: str | None = None

    @classmethod
    def from_quote(
        cls,
        quote_request: Mapping[str, Any],
        quote_response: Mapping[str, Any],
    ) -> "TransactionSummary":
        """Combine a quote request and its response into a summary."""
        return cls(
            transaction_id=quote_request.get("transactionId"),
            quote_id=quote_request.get("quoteId"),
            payee=quote_request.get("payee"),
            payer=quote_request.get("payer"),
            amount=quote_response.get("transferAmount"),
            transaction_type=quote_request.get("transactionType"),
            note=quote_response.get("note"),
        )

    def to_wire(self) -> dict[str, Any]:
        """
        Return the JSON-ready object in wire order.

        Absent values are omitted rather than sent as null.
        """
        fields = {
            "transactionId": self.transaction_id,
            "quoteId": self.quote_id,
            "payee": self.payee,
            "payer": self.payer,
            "amount": self.amount,
            "transactionType": self.transaction_type,
            "note": self.note,
        }
        return {key: value for key, value in fields.items() if value is not None}


@dataclass(frozen=True)
class PacketInput:
    """Input to the ILP packet codec."""
    amount: str  # unsigned 64-bit integer as a string
    address: str
    data: bytes


@dataclass(frozen=True)
class IlpArtifact:
    """
    ILP values returned with a quote response.

    All three values are base64url without padding. The fulfilment and
    condition each decode to 32 bytes.
    """
    fulfilment: str
    ilp_packet: str
    condition: str

    def to_dict(self) -> dict[str, str]:
        """Serialize with the Mojaloop API field names."""
        return {
            "fulfilment": self.fulfilment,
            "ilpPacket": self.ilp_packet,
            "condition": self.condition,
        }
