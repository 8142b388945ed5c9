"""Mock securities provider for testing and CI — no API key required."""

from __future__ import annotations

from divtrack.errors import DivTrackError, ErrorCode
from divtrack.models.security import SecuritySearchResult, StockData
from divtrack.safety import compute_safety_score
from divtrack.securities.base import MAX_RESULTS, MIN_QUERY_LENGTH, BaseSecuritiesProvider

_DEFAULT_UNIVERSE: tuple[SecuritySearchResult, ...] = (
    SecuritySearchResult("AAPL", "Apple Inc.", "CS", "NASDAQ"),
    SecuritySearchResult("MSFT", "Microsoft Corporation", "CS", "NASDAQ"),
    SecuritySearchResult("JNJ", "Johnson & Johnson", "CS", "NYSE"),
    SecuritySearchResult("JPM", "JPMorgan Chase & Co.", "CS", "NYSE"),
    SecuritySearchResult("PG", "Procter & Gamble Co.", "CS", "NYSE"),
    SecuritySearchResult("XOM", "Exxon Mobil Corporation", "CS", "NYSE"),
    SecuritySearchResult("SCHD", "Schwab US Dividend Equity ETF", "ETF", "NYSEARCA"),
)


class MockSecuritiesProvider(BaseSecuritiesProvider):
    """In-memory provider over a small default universe.

    Use ``set_securities`` and ``set_stock_data`` to pre-load data.
    """

    def __init__(self) -> None:
        self._securities: list[SecuritySearchResult] = list(_DEFAULT_UNIVERSE)
        self._stock_data: dict[str, StockData] = {}

    def set_securities(self, securities: list[SecuritySearchResult]) -> None:
        self._securities = list(securities)

    def set_stock_data(self, ticker: str, data: StockData) -> None:
        self._stock_data[ticker.upper()] = data

    def search(self, query: str) -> list[SecuritySearchResult]:
        needle = query.strip().lower()
        if len(needle) < MIN_QUERY_LENGTH:
            return []
        hits = [
            s for s in self._securities
            if needle in s.ticker.lower() or needle in s.name.lower()
        ]
        return hits[:MAX_RESULTS]

    def get_stock_data(self, ticker: str) -> StockData:
        key = ticker.strip().upper()
        if key in self._stock_data:
            return self._stock_data[key]
        match = next((s for s in self._securities if s.ticker == key), None)
        if match is None:
            raise DivTrackError(f"No stock data for {key}", code=ErrorCode.NOT_FOUND)
        return StockData(
            ticker=key,
            name=match.name,
            price=100.0,
            dividend_yield=3.0,
            latest_dividend=0.75,
            safety_score=compute_safety_score(3.0, 0.5),
        )

    def capabilities(self) -> set[str]:
        return {"search", "stock_data", "safety_score"}
