"""Entity store dependency provider."""

from giving_server.core.container import get_container
from giving_server.modules.entities.repository import EntityStore


def get_entity_store() -> EntityStore:
    store = get_container().store
    assert store is not None  # set by init_infrastructure
    return store


__all__ = ["get_entity_store"]
