"""Top-level API routes."""
