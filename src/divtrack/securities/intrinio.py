"""Intrinio securities provider.

Search and latest-dividend lookups against the Intrinio v2 REST API,
authenticated with a Bearer API key.
"""

from __future__ import annotations

import logging
import os
from datetime import date
from typing import Any
from urllib.parse import quote

import requests

from divtrack.errors import DivTrackError, ErrorCode
from divtrack.models.security import SecuritySearchResult, StockData
from divtrack.rest import request_json
from divtrack.safety import compute_safety_score
from divtrack.securities.base import MAX_RESULTS, MIN_QUERY_LENGTH, BaseSecuritiesProvider

log = logging.getLogger(__name__)


def _optional_date(value: Any) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


class IntrinioProvider(BaseSecuritiesProvider):
    """Fetch security search results and dividend data from Intrinio.

    Capabilities: search, stock_data, safety_score.
    """

    base_url = "https://api-v2.intrinio.com"

    def __init__(
        self,
        api_key: str | None = None,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key or os.getenv("INTRINIO_API_KEY")
        if not self.api_key:
            raise DivTrackError(
                "Intrinio API key required. Set INTRINIO_API_KEY env var or pass api_key.",
                code=ErrorCode.AUTH_FAILED,
            )
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Authorization": f"Bearer {self.api_key}"})

    def capabilities(self) -> set[str]:
        return {"search", "stock_data", "safety_score"}

    # -------------------------------------------------------------- search

    def search(self, query: str) -> list[SecuritySearchResult]:
        query = query.strip()
        if len(query) < MIN_QUERY_LENGTH:
            return []

        data = self._get("/securities/search", params={"query": query}) or {}
        results: list[SecuritySearchResult] = []
        for item in data.get("securities") or []:
            ticker = item.get("ticker")
            if not ticker:
                continue
            results.append(SecuritySearchResult(
                ticker=ticker,
                name=item.get("name") or ticker,
                security_type=item.get("security_type"),
                exchange=item.get("exchange"),
            ))
        return results[:MAX_RESULTS]

    # ---------------------------------------------------------- stock data

    def get_stock_data(self, ticker: str) -> StockData:
        symbol = quote(ticker.strip().upper(), safe="")
        security = self._get(f"/securities/{symbol}") or {}
        dividend = self._get(f"/securities/{symbol}/dividends/latest") or {}

        dividend_yield = float(security.get("dividend_yield") or 0.0)
        payout_ratio = self._payout_ratio(symbol)

        return StockData(
            ticker=security.get("ticker") or ticker.upper(),
            name=security.get("name") or ticker.upper(),
            price=float(security.get("last_price") or 0.0),
            dividend_yield=dividend_yield,
            latest_dividend=float(dividend.get("amount") or 0.0),
            ex_div_date=_optional_date(dividend.get("ex_dividend")),
            payment_date=_optional_date(dividend.get("pay_date")),
            safety_score=compute_safety_score(dividend_yield, payout_ratio),
        )

    def _payout_ratio(self, symbol: str) -> float | None:
        """Payout ratio data point; None when Intrinio has no value."""
        try:
            value = self._get(f"/data_point/{symbol}/payoutratio/number")
        except DivTrackError as exc:
            log.info("No payout ratio for %s: %s", symbol, exc)
            return None
        try:
            return float(value) if value is not None else None
        except (TypeError, ValueError):
            return None

    # ------------------------------------------------------------ internal

    def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return request_json(
            self.session,
            "GET",
            f"{self.base_url}{path}",
            source="Intrinio",
            timeout=self.timeout,
            params=params,
        )
