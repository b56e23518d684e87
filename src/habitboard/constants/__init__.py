"""Display constants."""
