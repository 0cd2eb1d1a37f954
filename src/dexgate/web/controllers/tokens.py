"""Custom token API endpoints (EVM networks only)."""

from fastapi import APIRouter, Depends

from dexgate.web.contracts.config import (
    DefaultTokenRequest,
    MessageResponse,
    RemoveDefaultTokenRequest,
)
from dexgate.web.controllers.deps import get_config_service
from dexgate.web.services.config_service import ConfigService

router = APIRouter(prefix="/tokens", tags=["system"])


@router.post("/add", response_model=MessageResponse)
async def add_token(
    request: DefaultTokenRequest,
    service: ConfigService = Depends(get_config_service),
) -> MessageResponse:
    """Add a custom token to a chain/network token list.

    The chain client reloads the list before this returns, so the token can
    be quoted immediately.
    """
    await service.add_token(
        request.chain,
        request.network,
        request.name,
        request.symbol,
        request.address,
        request.decimals,
    )
    return MessageResponse(message=f"Token {request.symbol} added to {request.chain}/{request.network}")


@router.post("/remove", response_model=MessageResponse)
async def remove_token(
    request: RemoveDefaultTokenRequest,
    service: ConfigService = Depends(get_config_service),
) -> MessageResponse:
    """Remove a custom token by symbol or address."""
    await service.remove_token(request.chain, request.network, request.token)
    return MessageResponse(message=f"Token {request.token} removed from {request.chain}/{request.network}")
