"""Application fixture package."""
