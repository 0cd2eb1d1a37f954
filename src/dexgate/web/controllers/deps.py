"""FastAPI dependencies resolving services from the application state."""

from fastapi import Request

from dexgate.web.services.config_service import ConfigService
from dexgate.web.services.quote_service import QuoteService


def get_config_service(request: Request) -> ConfigService:
    return request.app.state.config_service


def get_quote_service(request: Request) -> QuoteService:
    return request.app.state.quote_service
