"""Web layer: contracts (pydantic), services and FastAPI controllers."""

__all__ = [
    "contracts",
    "services",
    "controllers",
]
