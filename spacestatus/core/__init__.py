"""Core helpers: structured logging."""
