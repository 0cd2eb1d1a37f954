"""Web services behind the HTTP controllers.

ConfigService mutates configuration (config tree, default pools, token
lists). QuoteService is read-only.
"""

from dexgate.web.services.config_service import ConfigService
from dexgate.web.services.quote_service import QuoteService

__all__ = [
    "ConfigService",
    "QuoteService",
]
