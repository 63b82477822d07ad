"""
Pydantic schemas for API request/response validation.

Request schemas follow the Mojaloop FSPIOP quote resources. Unknown fields
are kept, since the payer and payee objects are carried verbatim in the
ILP packet data.
All monetary values use strings to avoid floating point issues.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _Passthrough(BaseModel):
    """Base for Mojaloop objects whose extra fields must survive."""
    model_config = ConfigDict(extra="allow")


# =============================================================================
# Request Schemas
# =============================================================================

class MoneySchema(_Passthrough):
    """Mojaloop money object."""
    currency: str = Field(..., min_length=3, max_length=3)
    amount: str = Field(..., description="Decimal amount as a string")


class PartyIdInfo(_Passthrough):
    """Party identification."""
    partyIdType: str
    partyIdentifier: str
    partySubIdOrType: str | None = None
    fspId: str | None = None


class PartySchema(_Passthrough):
    """Mojaloop party object."""
    partyIdInfo: PartyIdInfo


class QuoteRequest(_Passthrough):
    """The fields of a Mojaloop quote request used for ILP."""
    quoteId: str
    transactionId: str
    payee: PartySchema
    payer: PartySchema
    transactionType: dict[str, Any]


class QuoteResponse(_Passthrough):
    """The fields of a Mojaloop quote response used for ILP."""
    transferAmount: MoneySchema
    note: str | None = None


class GenerateIlpRequest(BaseModel):
    """Request to generate ILP values for a quote response."""
    quoteRequest: QuoteRequest
    quoteResponse: QuoteResponse


class ValidateFulfilmentRequest(BaseModel):
    """Request to check a fulfilment against a condition."""
    fulfilment: str
    condition: str


class DecodePacketRequest(BaseModel):
    """Request to decode an ILP packet."""
    ilpPacket: str


# =============================================================================
# Response Schemas
# =============================================================================

class IlpArtifactResponse(BaseModel):
    """ILP values for a quote response."""
    fulfilment: str
    ilpPacket: str
    condition: str


class ValidateFulfilmentResponse(BaseModel):
    """Result of fulfilment validation."""
    valid: bool


class DecodedPacketResponse(BaseModel):
    """Contents of an ILP packet."""
    amount: str
    address: str
    transaction: dict[str, Any]


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    version: str
    currencies: int


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    detail: str | None = None
    code: str | None = None
