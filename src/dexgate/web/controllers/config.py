"""Configuration and default pool API endpoints."""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query

from dexgate.web.contracts.config import ConfigUpdateRequest, DefaultPoolRequest, MessageResponse
from dexgate.web.controllers.deps import get_config_service
from dexgate.web.services.config_service import ConfigService

router = APIRouter(prefix="/config", tags=["system"])


@router.get("")
async def get_config(
    chain_or_connector: Optional[str] = Query(
        None,
        alias="chainOrConnector",
        description='Optional chain or connector name (e.g., "ethereum", "uniswap")',
    ),
    service: ConfigService = Depends(get_config_service),
) -> dict[str, Any]:
    """Get the configuration of one chain/connector, or of all of them."""
    return service.get_config(chain_or_connector)


@router.post("/update", response_model=MessageResponse)
async def update_config(
    request: ConfigUpdateRequest,
    service: ConfigService = Depends(get_config_service),
) -> MessageResponse:
    """Set a configuration value by dotted path.

    ``allowedSlippage`` values are validated and stored as fraction strings.
    """
    service.update_config(request.config_path, request.config_value)
    return MessageResponse(message=f"Configuration updated successfully: {request.config_path}")


@router.get("/pools")
async def get_pools(
    connector: str = Query(
        ...,
        description='Connector name in format "connector/type" (e.g., uniswap/clmm)',
        examples=["uniswap/clmm"],
    ),
    service: ConfigService = Depends(get_config_service),
) -> dict[str, str]:
    """Get default pools ({pair: address}) for a connector."""
    return service.get_default_pools(connector)


@router.post("/pools/add", response_model=MessageResponse)
async def add_pool(
    request: DefaultPoolRequest,
    service: ConfigService = Depends(get_config_service),
) -> MessageResponse:
    """Add (or overwrite) the default pool for a token pair."""
    network = service.add_default_pool(
        request.connector, request.base_token, request.quote_token, request.pool_address
    )
    return MessageResponse(
        message=(
            f"Default pool added for {request.base_token}-{request.quote_token} "
            f"on {request.connector} ({network})"
        )
    )


@router.post("/pools/remove", response_model=MessageResponse)
async def remove_pool(
    request: DefaultPoolRequest,
    service: ConfigService = Depends(get_config_service),
) -> MessageResponse:
    """Remove the default pool for a token pair."""
    network = service.remove_default_pool(request.connector, request.base_token, request.quote_token)
    return MessageResponse(
        message=(
            f"Default pool removed for {request.base_token}-{request.quote_token} "
            f"on {request.connector} ({network})"
        )
    )
