"""Request and response contracts for the web API."""

from dexgate.web.contracts.config import (
    ConfigUpdateRequest,
    ConfigValue,
    DefaultPoolRequest,
    DefaultTokenRequest,
    MessageResponse,
    RemoveDefaultTokenRequest,
)
from dexgate.web.contracts.quotes import SwapQuoteResponse

__all__ = [
    "ConfigUpdateRequest",
    "ConfigValue",
    "DefaultPoolRequest",
    "DefaultTokenRequest",
    "MessageResponse",
    "RemoveDefaultTokenRequest",
    "SwapQuoteResponse",
]
