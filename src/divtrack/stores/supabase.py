"""Supabase event store backed by the ``dividends`` table over PostgREST.

Every query is scoped to the configured user. The table stores price only
implicitly: cash rows carry their contribution in ``amount``.
"""

from __future__ import annotations

import logging
import os
from typing import Any

import requests

from divtrack.errors import DivTrackError, ErrorCode
from divtrack.models.dividend import CASH_TICKER, DividendEvent
from divtrack.rest import request_json
from divtrack.stores.base import BaseEventStore
from divtrack.validation import parse_event

log = logging.getLogger(__name__)


class SupabaseEventStore(BaseEventStore):
    """Persist events in a Supabase table through its REST endpoint."""

    table = "dividends"

    def __init__(
        self,
        url: str | None = None,
        api_key: str | None = None,
        user_id: str | None = None,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.url = (url or os.getenv("SUPABASE_URL") or "").rstrip("/")
        self.api_key = api_key or os.getenv("SUPABASE_KEY")
        self.user_id = user_id or os.getenv("DIVTRACK_USER_ID")
        if not self.url or not self.api_key:
            raise DivTrackError(
                "Supabase URL and key required. Set SUPABASE_URL and SUPABASE_KEY "
                "env vars or pass url/api_key.",
                code=ErrorCode.AUTH_FAILED,
            )
        if not self.user_id:
            raise DivTrackError(
                "Supabase store needs a user_id to scope queries.",
                code=ErrorCode.AUTH_FAILED,
            )

        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        })

    @property
    def endpoint(self) -> str:
        return f"{self.url}/rest/v1/{self.table}"

    # --------------------------------------------------------------- store

    def list_events(self) -> list[DividendEvent]:
        rows = self._request("GET", params={
            "select": "*",
            "user_id": f"eq.{self.user_id}",
        }) or []
        events: list[DividendEvent] = []
        for row in rows:
            try:
                events.append(self.row_to_event(row))
            except DivTrackError as exc:
                log.warning("Skipping malformed row %s: %s", row.get("id"), exc)
        return events

    def create(self, event: DividendEvent) -> DividendEvent:
        row = self.event_to_row(event)
        row["user_id"] = self.user_id
        rows = self._request("POST", json=row, headers={"Prefer": "return=representation"})
        return self.row_to_event(self._single(rows, "create"))

    def update(self, event: DividendEvent) -> DividendEvent:
        if not event.id:
            raise DivTrackError(
                "Cannot update an event without an id",
                code=ErrorCode.VALIDATION_FAILED,
            )
        rows = self._request(
            "PATCH",
            params={"id": f"eq.{event.id}", "user_id": f"eq.{self.user_id}"},
            json=self.event_to_row(event),
            headers={"Prefer": "return=representation"},
        )
        return self.row_to_event(self._single(rows, f"update of {event.id}"))

    def delete(self, event_id: str) -> bool:
        rows = self._request(
            "DELETE",
            params={"id": f"eq.{event_id}", "user_id": f"eq.{self.user_id}"},
            headers={"Prefer": "return=representation"},
        )
        self._single(rows, f"delete of {event_id}")
        return True

    # ------------------------------------------------------------ mapping

    @staticmethod
    def event_to_row(event: DividendEvent) -> dict[str, Any]:
        return {
            "ticker": event.ticker,
            "ex_div_date": event.ex_date.isoformat(),
            "payment_date": event.pay_date.isoformat() if event.pay_date else None,
            "dividend_yield": event.dividend_yield,
            "amount": event.amount,
            "status": event.status.value,
            "notes": event.notes,
            "yoc": event.yield_on_cost,
        }

    @staticmethod
    def row_to_event(row: dict[str, Any]) -> DividendEvent:
        """Map a table row onto an event, validating it on the way in.

        ``received`` follows the row status; only cash rows get a price.
        """
        ticker = row.get("ticker") or ""
        status = row.get("status")
        return parse_event({
            "id": row.get("id"),
            "ticker": ticker,
            "ex_date": row.get("ex_div_date"),
            "pay_date": row.get("payment_date"),
            "dividend_yield": row.get("dividend_yield"),
            "received": status == "Confirmed",
            "amount": row.get("amount"),
            "status": status,
            "notes": row.get("notes"),
            "yield_on_cost": row.get("yoc"),
            "price": row.get("amount") if ticker.upper() == CASH_TICKER else None,
            "created_at": row.get("created_at"),
        })

    # ------------------------------------------------------------ internal

    def _request(self, method: str, **kwargs: Any) -> Any:
        return request_json(
            self.session,
            method,
            self.endpoint,
            source="Supabase",
            timeout=self.timeout,
            **kwargs,
        )

    @staticmethod
    def _single(rows: Any, action: str) -> dict[str, Any]:
        if not rows:
            raise DivTrackError(
                f"Supabase {action} matched no rows",
                code=ErrorCode.NOT_FOUND,
            )
        return rows[0] if isinstance(rows, list) else rows
