"""Ingestion validation for dividend event records.

Records arrive from forms, stores and security lookups as loose mappings.
They are checked and coerced here so that aggregation only ever sees
well-formed events with real dates.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from dateutil.parser import isoparse

from divtrack.dates import parse_date
from divtrack.errors import DivTrackError, ErrorCode
from divtrack.models.dividend import DividendEvent, EventStatus

MAX_TICKER_LENGTH = 10

# camelCase keys used by the web client and CSV imports
_ALIASES: dict[str, str] = {
    "exDate": "ex_date",
    "payDate": "pay_date",
    "yield": "dividend_yield",
    "yieldOnCost": "yield_on_cost",
    "createdAt": "created_at",
    "safetyScore": "safety_score",
    "safetyRating": "safety_rating",
}


@dataclass
class ValidationCheck:
    """Single validation check result."""

    name: str
    passed: bool
    message: str = ""


@dataclass
class ValidationResult:
    """Aggregate validation result."""

    checks: list[ValidationCheck] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(c.passed for c in self.checks)

    @property
    def failed_checks(self) -> list[ValidationCheck]:
        return [c for c in self.checks if not c.passed]


def field_name(key: str) -> str:
    """Model field name for a snake_case or camelCase key."""
    return _ALIASES.get(key, key)


def normalize_keys(record: Mapping[str, Any]) -> dict[str, Any]:
    """Map camelCase aliases onto model field names."""
    return {field_name(k): v for k, v in record.items()}


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _number(value: Any) -> float | None:
    if _blank(value):
        return None
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"not a finite number: {value!r}")
    return number


def _check_date(result: ValidationResult, name: str, value: Any, required: bool) -> None:
    if _blank(value):
        if required:
            result.checks.append(ValidationCheck(name, False, "date is required"))
        else:
            result.checks.append(ValidationCheck(name, True))
        return
    try:
        parse_date(value)
    except DivTrackError as exc:
        result.checks.append(ValidationCheck(name, False, str(exc)))
    else:
        result.checks.append(ValidationCheck(name, True))


def _check_range(
    result: ValidationResult,
    name: str,
    value: Any,
    low: float = 0.0,
    high: float | None = None,
) -> None:
    try:
        number = _number(value)
    except (TypeError, ValueError):
        result.checks.append(ValidationCheck(name, False, f"not a number: {value!r}"))
        return
    if number is None:
        result.checks.append(ValidationCheck(name, True))
    elif number < low:
        result.checks.append(ValidationCheck(name, False, f"{number} is below {low}"))
    elif high is not None and number > high:
        result.checks.append(ValidationCheck(name, False, f"{number} is above {high}"))
    else:
        result.checks.append(ValidationCheck(name, True))


def validate_record(record: Mapping[str, Any]) -> ValidationResult:
    """Run all ingestion checks on a raw event record.

    Checks:
        1. Ticker present
        2. Ticker length (at most 10 characters)
        3. Ex-date present and parseable
        4. Pay date parseable when present
        5. Amount and price non-negative
        6. Yield, yield on cost and safety score within 0-100
        7. Status is Confirmed or Projected
    """
    data = normalize_keys(record)
    result = ValidationResult()

    ticker = data.get("ticker")
    ticker = ticker.strip() if isinstance(ticker, str) else ""
    if ticker:
        result.checks.append(ValidationCheck("ticker_present", True))
    else:
        result.checks.append(ValidationCheck("ticker_present", False, "ticker is required"))
    if len(ticker) > MAX_TICKER_LENGTH:
        result.checks.append(ValidationCheck(
            "ticker_length", False,
            f"ticker longer than {MAX_TICKER_LENGTH} characters",
        ))
    else:
        result.checks.append(ValidationCheck("ticker_length", True))

    _check_date(result, "ex_date_valid", data.get("ex_date"), required=True)
    _check_date(result, "pay_date_valid", data.get("pay_date"), required=False)

    _check_range(result, "amount_range", data.get("amount"))
    _check_range(result, "price_range", data.get("price"))
    _check_range(result, "yield_range", data.get("dividend_yield"), high=100.0)
    _check_range(result, "yield_on_cost_range", data.get("yield_on_cost"), high=100.0)
    _check_range(result, "safety_score_range", data.get("safety_score"), high=100.0)

    status = data.get("status")
    if _blank(status) or isinstance(status, EventStatus):
        result.checks.append(ValidationCheck("status_valid", True))
    else:
        try:
            EventStatus(status)
        except ValueError:
            result.checks.append(ValidationCheck(
                "status_valid", False, f"unknown status {status!r}",
            ))
        else:
            result.checks.append(ValidationCheck("status_valid", True))

    return result


def _parse_timestamp(value: Any) -> datetime | None:
    if _blank(value):
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        return isoparse(str(value))
    except ValueError:
        return None


def _parse_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"true", "1", "yes", "y"}
    return bool(value)


def parse_event(record: Mapping[str, Any]) -> DividendEvent:
    """Validate and coerce a raw record into a DividendEvent.

    Raises:
        DivTrackError: VALIDATION_FAILED listing every failed check.
    """
    result = validate_record(record)
    if not result.passed:
        msgs = "; ".join(f"{c.name}: {c.message}" for c in result.failed_checks)
        raise DivTrackError(
            f"Invalid dividend event: {msgs}",
            code=ErrorCode.VALIDATION_FAILED,
        )

    data = normalize_keys(record)
    status = data.get("status")
    notes = data.get("notes")
    rating = data.get("safety_rating")
    event_id = data.get("id")

    return DividendEvent(
        id=None if _blank(event_id) else str(event_id),
        ticker=data["ticker"].strip().upper(),
        ex_date=parse_date(data["ex_date"]),
        pay_date=None if _blank(data.get("pay_date")) else parse_date(data["pay_date"]),
        received=_parse_bool(data.get("received", False)),
        amount=_number(data.get("amount")),
        dividend_yield=_number(data.get("dividend_yield")),
        yield_on_cost=_number(data.get("yield_on_cost")),
        price=_number(data.get("price")),
        status=EventStatus(status) if not _blank(status) else EventStatus.PROJECTED,
        notes=None if _blank(notes) else str(notes),
        created_at=_parse_timestamp(data.get("created_at")),
        safety_score=_number(data.get("safety_score")),
        safety_rating=None if _blank(rating) else str(rating),
    )
