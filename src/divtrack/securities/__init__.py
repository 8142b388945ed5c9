"""Securities provider registry."""

from __future__ import annotations

from divtrack.config import SecuritiesBackend
from divtrack.securities.base import BaseSecuritiesProvider

SECURITIES_CLASSES: dict[SecuritiesBackend, str] = {
    SecuritiesBackend.INTRINIO: "divtrack.securities.intrinio.IntrinioProvider",
    SecuritiesBackend.MOCK: "divtrack.securities.mock.MockSecuritiesProvider",
}


def create_securities_provider(
    backend: SecuritiesBackend,
    **kwargs,
) -> BaseSecuritiesProvider:
    """Instantiate a provider by backend, forwarding kwargs to its constructor."""
    import importlib

    dotted = SECURITIES_CLASSES[backend]
    module_path, cls_name = dotted.rsplit(".", 1)
    module = importlib.import_module(module_path)
    cls = getattr(module, cls_name)
    return cls(**kwargs)


__all__ = ["BaseSecuritiesProvider", "SECURITIES_CLASSES", "create_securities_provider"]
