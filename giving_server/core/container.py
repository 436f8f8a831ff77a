"""Simple dependency container for wiring core services."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache

from giving_server.core.config import Settings, get_settings
from giving_server.infrastructure.database.repositories import SqlEntityStore
from giving_server.infrastructure.database.session import get_engine, get_session_factory
from giving_server.modules.entities.repository import EntityStore


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    store: EntityStore | None = field(default=None)

    def init_infrastructure(self) -> None:
        """Ensure the database engine exists and build the entity store on top of it."""
        get_engine()
        if self.store is None:
            self.store = SqlEntityStore(get_session_factory())


@lru_cache()
def get_container() -> ApplicationContainer:
    container = ApplicationContainer(settings=get_settings())
    container.init_infrastructure()
    return container


__all__ = ["ApplicationContainer", "get_container"]
