"""HTTP controllers for web API endpoints."""

from dexgate.web.controllers.config import router as config_router
from dexgate.web.controllers.quotes import router as quotes_router
from dexgate.web.controllers.tokens import router as tokens_router

__all__ = [
    "config_router",
    "quotes_router",
    "tokens_router",
]
