"""Abstract base class for securities data providers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from divtrack.models.security import SecuritySearchResult, StockData

MIN_QUERY_LENGTH = 2
MAX_RESULTS = 10


class BaseSecuritiesProvider(ABC):
    """Abstract base for security search and stock data lookups.

    Results only prefill new events; nothing here feeds aggregation.
    """

    @abstractmethod
    def search(self, query: str) -> list[SecuritySearchResult]:
        """Search securities by ticker or name.

        Queries shorter than two characters return an empty list without
        touching the backend.
        """
        ...

    @abstractmethod
    def get_stock_data(self, ticker: str) -> StockData:
        """Latest price and dividend data for a ticker."""
        ...

    def capabilities(self) -> set[str]:
        """Return the set of supported features.

        Possible values: ``search``, ``stock_data``, ``safety_score``.
        """
        return {"search", "stock_data"}
