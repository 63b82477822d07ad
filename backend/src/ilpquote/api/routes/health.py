"""
Health check endpoint.

Provides system health status for monitoring and load balancers.
"""

from fastapi import APIRouter, Depends

from ilpquote import __version__
from ilpquote.api.routes.ilp import get_ilp_service
from ilpquote.api.schemas import HealthResponse
from ilpquote.services.ilp import IlpService

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    service: IlpService = Depends(get_ilp_service),
) -> HealthResponse:
    """
    Check system health.

    Reports the number of currencies the service can convert.
    """
    return HealthResponse(
        status="healthy",
        version=__version__,
        currencies=len(service.amounts.currency_decimals),
    )
