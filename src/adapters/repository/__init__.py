"""Repository adapters - Database implementations."""

from .postgres import PostgresRegistryRepository, run_migrations

__all__ = ["PostgresRegistryRepository", "run_migrations"]
