"""divtrack — personal dividend income tracking.

Record dividend events and cash contributions, aggregate them into
cumulative timelines and calendar buckets, export to CSV, and prefill new
events from securities data.

Quick start::

    from divtrack import create_tracker_from_env
    tracker = create_tracker_from_env()
    tracker.load_events()
    points = tracker.timeline("monthly")
"""

from __future__ import annotations

import os

from divtrack.cache import LookupCache, MemoryCache, NoCache
from divtrack.calendar import bucket_events, events_on, leading_blank_days, month_days, month_view
from divtrack.config import SecuritiesBackend, StoreBackend, TrackerConfig
from divtrack.errors import DivTrackError, ErrorCode
from divtrack.export import events_to_frame, export_csv, export_filename
from divtrack.filters import (
    DividendFilters,
    ListSort,
    apply_filters,
    paginate,
    search_events,
    sort_events,
    visible_series,
)
from divtrack.models import (
    CASH_TICKER,
    CalendarEntry,
    DividendEvent,
    EventStatus,
    OccurrenceKind,
    SafetyScore,
    SecuritySearchResult,
    StockData,
    TimelinePoint,
    TimeScale,
)
from divtrack.safety import compute_safety_score
from divtrack.settings import SettingsError, TrackerSettings
from divtrack.timeline import (
    PROJECTION_MONTHS,
    SHARE_MULTIPLIER,
    build_timeline,
    timeline_to_frame,
)
from divtrack.tracker import DividendTracker
from divtrack.validation import ValidationResult, parse_event, validate_record

__version__ = "0.1.0"

__all__ = [
    # Tracker
    "DividendTracker",
    "create_tracker_from_env",
    # Config & settings
    "TrackerConfig",
    "StoreBackend",
    "SecuritiesBackend",
    "TrackerSettings",
    "SettingsError",
    # Errors
    "DivTrackError",
    "ErrorCode",
    # Models
    "CASH_TICKER",
    "DividendEvent",
    "EventStatus",
    "TimelinePoint",
    "TimeScale",
    "CalendarEntry",
    "OccurrenceKind",
    "SecuritySearchResult",
    "StockData",
    "SafetyScore",
    # Aggregation
    "build_timeline",
    "timeline_to_frame",
    "SHARE_MULTIPLIER",
    "PROJECTION_MONTHS",
    "bucket_events",
    "events_on",
    "month_days",
    "month_view",
    "leading_blank_days",
    # Ingestion, filters, export
    "parse_event",
    "validate_record",
    "ValidationResult",
    "DividendFilters",
    "search_events",
    "apply_filters",
    "visible_series",
    "ListSort",
    "sort_events",
    "paginate",
    "events_to_frame",
    "export_csv",
    "export_filename",
    "compute_safety_score",
    # Caches
    "LookupCache",
    "MemoryCache",
    "NoCache",
]


def create_tracker_from_env() -> DividendTracker:
    """Zero-config factory — reads backends and credentials from env vars.

    Environment variables:
        DIVTRACK_STORE: Event store — "mock" or "supabase" (default: "mock").
        DIVTRACK_SECURITIES: Securities data — "mock" or "intrinio" (default: "mock").
        DIVTRACK_USER_ID: Owner id for Supabase queries.
        DIVTRACK_SEED_DEMO: "1" to seed the mock store with demo data.
        DIVTRACK_CACHE: Lookup cache — "memory" or "none" (default: "memory").
        SUPABASE_URL: Supabase project URL.
        SUPABASE_KEY: Supabase API key.
        INTRINIO_API_KEY: Intrinio API key.
    """
    config = TrackerConfig(
        store=StoreBackend(os.getenv("DIVTRACK_STORE", "mock").strip().lower()),
        securities=SecuritiesBackend(os.getenv("DIVTRACK_SECURITIES", "mock").strip().lower()),
        supabase_url=os.getenv("SUPABASE_URL"),
        supabase_key=os.getenv("SUPABASE_KEY"),
        user_id=os.getenv("DIVTRACK_USER_ID"),
        intrinio_api_key=os.getenv("INTRINIO_API_KEY"),
        seed_demo_data=os.getenv("DIVTRACK_SEED_DEMO", "0") == "1",
        cache_backend=os.getenv("DIVTRACK_CACHE", "memory"),
    )
    return DividendTracker(config)
