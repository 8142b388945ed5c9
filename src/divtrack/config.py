"""Dividend tracker configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class StoreBackend(Enum):
    """Supported event store backends."""

    MOCK = "mock"
    SUPABASE = "supabase"


class SecuritiesBackend(Enum):
    """Supported securities data backends."""

    INTRINIO = "intrinio"
    MOCK = "mock"


@dataclass
class TrackerConfig:
    """Configuration for DividendTracker.

    Attributes:
        store: Event store backend, chosen once at construction.
        securities: Securities search/stock data backend.
        supabase_url: Project URL of the Supabase instance.
        supabase_key: Supabase anon or service key.
        user_id: Owner id used to scope every table query.
        intrinio_api_key: Intrinio API key.
        seed_demo_data: Fill the mock store with a synthetic portfolio.
        cache_backend: Lookup cache type, "memory" or "none".
        cache_ttl_seconds: TTL for cached search and stock data lookups.
        share_multiplier: Shares assumed per priced event for cash utilized.
        projection_months: Months past today covered by the timeline.
        request_timeout: Timeout in seconds for REST backends.
    """

    store: StoreBackend = StoreBackend.MOCK
    securities: SecuritiesBackend = SecuritiesBackend.MOCK

    supabase_url: str | None = None
    supabase_key: str | None = None
    user_id: str | None = None
    intrinio_api_key: str | None = None

    seed_demo_data: bool = False
    cache_backend: str = "memory"
    cache_ttl_seconds: int = 300
    share_multiplier: int = 100
    projection_months: int = 12
    request_timeout: float = 10.0
