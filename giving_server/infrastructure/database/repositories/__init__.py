"""SQLAlchemy-backed repository implementations."""

from .entity_repository import SqlEntityStore

__all__ = ["SqlEntityStore"]
