"""DividendTracker — central orchestrator over a store, a snapshot and views."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date
from typing import Any, TypeVar

from divtrack.cache import LookupCache, create_cache
from divtrack.calendar import bucket_events, events_on
from divtrack.config import SecuritiesBackend, StoreBackend, TrackerConfig
from divtrack.errors import DivTrackError, ErrorCode
from divtrack.export import export_csv
from divtrack.filters import (
    ITEMS_PER_PAGE,
    DividendFilters,
    ListSort,
    apply_filters,
    paginate,
    search_events,
    sort_events,
)
from divtrack.models.calendar import CalendarEntry
from divtrack.models.dividend import DividendEvent
from divtrack.models.security import SecuritySearchResult, StockData
from divtrack.models.timeline import TimelinePoint, TimeScale
from divtrack.securities import create_securities_provider
from divtrack.securities.base import BaseSecuritiesProvider
from divtrack.stores import create_store
from divtrack.stores.base import BaseEventStore
from divtrack.timeline import build_timeline

log = logging.getLogger(__name__)

T = TypeVar("T")


class DividendTracker:
    """Central orchestrator: store -> snapshot -> derived views.

    The store and securities provider are chosen once, from the config,
    unless injected. The event snapshot is an immutable tuple that is
    replaced after each successful store call and never mutated in place.

    Usage::

        from divtrack import create_tracker_from_env
        tracker = create_tracker_from_env()
        tracker.load_events()
        points = tracker.timeline("monthly")
    """

    def __init__(
        self,
        config: TrackerConfig | None = None,
        store: BaseEventStore | None = None,
        securities: BaseSecuritiesProvider | None = None,
        cache: LookupCache | None = None,
    ) -> None:
        self.config = config or TrackerConfig()
        self.store = store or self._build_store(self.config)
        self.securities = securities or self._build_securities(self.config)
        self.cache = cache or create_cache(
            self.config.cache_backend,
            ttl_seconds=self.config.cache_ttl_seconds,
        )
        self._events: tuple[DividendEvent, ...] = ()

    @staticmethod
    def _build_store(config: TrackerConfig) -> BaseEventStore:
        kwargs: dict[str, Any] = {}
        if config.store is StoreBackend.SUPABASE:
            kwargs["url"] = config.supabase_url
            kwargs["api_key"] = config.supabase_key
            kwargs["user_id"] = config.user_id
            kwargs["timeout"] = config.request_timeout
        store = create_store(config.store, **kwargs)
        if config.store is StoreBackend.MOCK and config.seed_demo_data:
            store.seed_demo_data()  # type: ignore[attr-defined]
        return store

    @staticmethod
    def _build_securities(config: TrackerConfig) -> BaseSecuritiesProvider:
        kwargs: dict[str, Any] = {}
        if config.securities is SecuritiesBackend.INTRINIO:
            kwargs["api_key"] = config.intrinio_api_key
            kwargs["timeout"] = config.request_timeout
        return create_securities_provider(config.securities, **kwargs)

    # ------------------------------------------------------------ snapshot

    @property
    def events(self) -> tuple[DividendEvent, ...]:
        return self._events

    def load_events(self) -> tuple[DividendEvent, ...]:
        """Replace the snapshot with the store's current contents.

        Raises:
            DivTrackError: LOAD_FAILED, chained to the store error. The
                previous snapshot is kept.
        """
        try:
            events = self.store.list_events()
        except Exception as exc:
            log.warning("Failed to load dividend events: %s", exc)
            raise DivTrackError(
                "Failed to load dividend events",
                code=ErrorCode.LOAD_FAILED,
                retryable=getattr(exc, "retryable", True),
            ) from exc
        self._events = tuple(events)
        log.info("Loaded %d dividend events", len(self._events))
        return self._events

    # ----------------------------------------------------------- mutations

    def add_event(self, event: DividendEvent) -> DividendEvent:
        created = self._action("add dividend event", lambda: self.store.create(event))
        self._events = self._events + (created,)
        log.info("Added %s event %s", created.ticker, created.id)
        return created

    def add_cash(self, amount: float, on: date, notes: str | None = None) -> DividendEvent:
        if amount <= 0:
            raise DivTrackError(
                "Cash amount must be greater than 0",
                code=ErrorCode.VALIDATION_FAILED,
            )
        created = self._action("add cash event", lambda: self.store.add_cash(amount, on, notes))
        self._events = self._events + (created,)
        log.info("Added cash event %s (%.2f)", created.id, amount)
        return created

    def update_event(self, event: DividendEvent) -> DividendEvent:
        if not event.id:
            raise DivTrackError(
                "Cannot update event without an id",
                code=ErrorCode.VALIDATION_FAILED,
            )
        updated = self._action("update dividend event", lambda: self.store.update(event))
        self._events = tuple(updated if e.id == updated.id else e for e in self._events)
        log.info("Updated %s event %s", updated.ticker, updated.id)
        return updated

    def delete_event(self, event_id: str) -> None:
        deleted = self._action("delete dividend event", lambda: self.store.delete(event_id))
        if not deleted:
            raise DivTrackError(
                f"Failed to delete dividend event {event_id}",
                code=ErrorCode.ACTION_FAILED,
            )
        self._events = tuple(e for e in self._events if e.id != event_id)
        log.info("Deleted event %s", event_id)

    # --------------------------------------------------------------- views

    def filtered(
        self,
        filters: DividendFilters | None = None,
        query: str | None = None,
    ) -> list[DividendEvent]:
        """Snapshot narrowed by the text query and dashboard filters."""
        events = search_events(self._events, query)
        if filters is not None:
            events = apply_filters(events, filters)
        return events

    def timeline(
        self,
        scale: TimeScale | str = TimeScale.MONTHLY,
        query: str | None = None,
        now: date | None = None,
        filters: DividendFilters | None = None,
    ) -> list[TimelinePoint]:
        return build_timeline(
            self.filtered(filters, query),
            scale,
            now=now,
            share_multiplier=self.config.share_multiplier,
            projection_months=self.config.projection_months,
        )

    def calendar(
        self,
        query: str | None = None,
        filters: DividendFilters | None = None,
    ) -> dict[str, list[CalendarEntry]]:
        return bucket_events(self.filtered(filters, query))

    def events_on(
        self,
        day: date | str,
        query: str | None = None,
        filters: DividendFilters | None = None,
    ) -> list[CalendarEntry]:
        """Entries for a clicked calendar day; empty means no detail view."""
        return events_on(self.calendar(query, filters), day)

    def listed(
        self,
        sort: ListSort | None = None,
        page: int = 1,
        per_page: int = ITEMS_PER_PAGE,
        query: str | None = None,
        filters: DividendFilters | None = None,
    ) -> tuple[list[DividendEvent], int]:
        """One page of the sorted event list and the total page count."""
        sort = sort or ListSort()
        ordered = sort_events(self.filtered(filters, query), sort.field, sort.descending)
        return paginate(ordered, page, per_page)

    def export_csv(self, query: str | None = None) -> str:
        return export_csv(self.filtered(query=query))

    # -------------------------------------------------------------- search

    def search_securities(self, query: str) -> list[SecuritySearchResult]:
        return self._cached(
            "search", query,
            lambda: self.securities.search(query),
            "search securities",
        )

    def get_stock_data(self, ticker: str) -> StockData:
        return self._cached(
            "stock", ticker,
            lambda: self.securities.get_stock_data(ticker),
            f"fetch stock data for {ticker.upper()}",
        )

    def prefill_event(self, ticker: str) -> DividendEvent:
        """New, unsaved event prefilled from the latest stock data."""
        return self.get_stock_data(ticker).to_event()

    def clear_cache(self) -> None:
        self.cache.clear_all()

    # ------------------------------------------------------------ internal

    def _action(self, what: str, call: Callable[[], T]) -> T:
        try:
            return call()
        except Exception as exc:
            log.warning("Failed to %s: %s", what, exc)
            raise DivTrackError(
                f"Failed to {what}",
                code=ErrorCode.ACTION_FAILED,
                retryable=getattr(exc, "retryable", False),
            ) from exc

    def _cached(self, namespace: str, key: str, fetch: Callable[[], T], what: str) -> T:
        hit = self.cache.get(namespace, key)
        if hit is not None:
            log.debug("Cache hit for %s %r", namespace, key)
            return hit
        value = self._action(what, fetch)
        self.cache.store(namespace, key, value)
        return value
