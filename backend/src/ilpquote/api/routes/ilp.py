"""
ILP endpoints.

Generates quote-response ILP values, validates fulfilments and decodes
ILP packets.
"""

import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, Request

from ilpquote.api.schemas import (
    DecodePacketRequest,
    DecodedPacketResponse,
    ErrorResponse,
    GenerateIlpRequest,
    IlpArtifactResponse,
    ValidateFulfilmentRequest,
    ValidateFulfilmentResponse,
)
from ilpquote.config import get_settings
from ilpquote.domain.addressing import IlpAddressBuilder
from ilpquote.infrastructure.currency_table import load_currency_table
from ilpquote.services.ilp import IlpService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ilp", tags=["ilp"])


@lru_cache
def get_ilp_service() -> IlpService:
    """Get or create the process-wide ILP service instance."""
    settings = get_settings()
    return IlpService(
        secret=settings.ilp_secret.get_secret_value(),
        currency_decimals=load_currency_table(settings.currency_table_path),
        address_builder=IlpAddressBuilder(strict=settings.strict_ilp_addresses),
        logger=logging.getLogger("ilpquote.services.ilp"),
    )


@router.post(
    "/quote-response",
    response_model=IlpArtifactResponse,
    responses={400: {"model": ErrorResponse, "description": "Quote cannot be expressed in ILP"}},
)
async def generate_quote_response_ilp(
    request: GenerateIlpRequest,
    http_request: Request,
    service: IlpService = Depends(get_ilp_service),
) -> IlpArtifactResponse:
    """
    Generate the fulfilment, ILP packet and condition for a quote response.

    The condition and packet go to the payer in the quote response; the
    fulfilment is revealed when the transfer is committed.

    The schemas only validate the body. The service gets the objects as
    sent, so the attached party objects keep their key order and nulls.
    """
    body = await http_request.json()
    artifact = service.generate_quote_response_artifact(
        body["quoteRequest"],
        body["quoteResponse"],
    )
    return IlpArtifactResponse(**artifact.to_dict())


@router.post("/validate-fulfilment", response_model=ValidateFulfilmentResponse)
async def validate_fulfilment(
    request: ValidateFulfilmentRequest,
    service: IlpService = Depends(get_ilp_service),
) -> ValidateFulfilmentResponse:
    """Check that a fulfilment matches a previously issued condition."""
    valid = service.validate_fulfilment(request.fulfilment, request.condition)
    if not valid:
        logger.info("Fulfilment does not match condition")
    return ValidateFulfilmentResponse(valid=valid)


@router.post(
    "/decode-packet",
    response_model=DecodedPacketResponse,
    responses={400: {"model": ErrorResponse, "description": "Not an ILP v1 payment packet"}},
)
async def decode_packet(
    request: DecodePacketRequest,
    service: IlpService = Depends(get_ilp_service),
) -> DecodedPacketResponse:
    """Decode an ILP packet and the transaction object it carries."""
    packet, transaction = service.decode_packet(request.ilpPacket)
    return DecodedPacketResponse(
        amount=packet.amount,
        address=packet.address,
        transaction=transaction,
    )
