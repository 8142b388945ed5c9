"""Event store registry."""

from __future__ import annotations

from divtrack.config import StoreBackend
from divtrack.stores.base import BaseEventStore

# Lazy registry: the REST store pulls in requests only when selected.
STORE_CLASSES: dict[StoreBackend, str] = {
    StoreBackend.MOCK: "divtrack.stores.mock.MockEventStore",
    StoreBackend.SUPABASE: "divtrack.stores.supabase.SupabaseEventStore",
}


def create_store(backend: StoreBackend, **kwargs) -> BaseEventStore:
    """Instantiate a store by backend, forwarding kwargs to its constructor."""
    import importlib

    dotted = STORE_CLASSES[backend]
    module_path, cls_name = dotted.rsplit(".", 1)
    module = importlib.import_module(module_path)
    cls = getattr(module, cls_name)
    return cls(**kwargs)


__all__ = ["BaseEventStore", "STORE_CLASSES", "create_store"]
