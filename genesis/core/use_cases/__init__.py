"""Use cases — one entry point per CLI operation, returning result objects."""
