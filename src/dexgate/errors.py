"""Gateway error taxonomy.

Every error raised by the configuration core and the connectors derives
from GatewayError and carries the HTTP status class it maps to. The API
layer turns them into JSON responses without re-wrapping.
"""


class GatewayError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgument(GatewayError):
    """Malformed or missing request field."""

    status_code = 400


class InvalidRange(GatewayError):
    """Value failed a range check (e.g. allowedSlippage out of bounds)."""

    status_code = 400


class InvalidPath(GatewayError):
    """Configuration path is empty or has an empty segment."""

    status_code = 400


class TypeMismatch(GatewayError):
    """Path tried to descend into a scalar or array node."""

    status_code = 400


class NotFound(GatewayError):
    """Pool, token or connector is absent."""

    status_code = 404


class Conflict(GatewayError):
    """Duplicate token address or symbol."""

    status_code = 409


class ConfigurationError(GatewayError):
    """Required configuration is missing or unreadable."""

    status_code = 500


class PersistenceError(GatewayError):
    """Writing to the config store or a token list failed."""

    status_code = 500


class ChainError(GatewayError):
    """Chain RPC call failed."""

    status_code = 502
