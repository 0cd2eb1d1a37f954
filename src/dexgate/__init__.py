"""dexgate - DEX gateway API for swap quotes and connector configuration."""

__version__ = "0.1.0"
