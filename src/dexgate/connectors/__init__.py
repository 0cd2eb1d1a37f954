"""DEX connectors."""
