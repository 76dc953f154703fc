"""External service clients (voice conversation, stream upload)."""
