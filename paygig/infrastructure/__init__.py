"""Infrastructure adapters (database, external services)."""
