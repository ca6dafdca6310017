"""High-level command implementations."""
