"""Decide whether a cron expression fires at a given instant."""

from __future__ import annotations

import re
from datetime import datetime

from .calendar import CalendarSnapshot, Clock, SystemClock
from .errors import InvalidBounds, InvalidFieldSegment, MalformedExpression
from .expand import expand
from .fields import FIELDS, field_spec

_WHITESPACE_RE = re.compile(r"\s+")


def split_expression(expression: str) -> list[str]:
    """Split *expression* into its 5 or 6 field tokens."""
    stripped = expression.strip()
    tokens = _WHITESPACE_RE.split(stripped) if stripped else []
    if len(tokens) not in (5, 6):
        raise MalformedExpression(expression, len(tokens))
    return tokens


def should_run(expression: str, calendar: CalendarSnapshot) -> bool:
    """Check whether *expression* matches the calendar snapshot.

    Fields are checked in order (minute, hour, day of month, month, day of
    week, year) and the first mismatch returns ``False`` without expanding
    the remaining fields. A 5-field expression matches any year.
    """
    tokens = split_expression(expression)
    if len(tokens) == 5:
        tokens.append(str(calendar.year))

    for spec, token in zip(FIELDS, tokens):
        value = calendar.value_for(spec.name)
        values = _expand_field(spec.name, token)
        if value not in values:
            return False
    return True


def should_run_at(
    expression: str,
    when: datetime | float | CalendarSnapshot | None = None,
    *,
    clock: Clock | None = None,
) -> bool:
    """Like :func:`should_run`, for a datetime, Unix timestamp or clock reading."""
    match when:
        case CalendarSnapshot():
            snapshot = when
        case datetime():
            snapshot = CalendarSnapshot.from_datetime(when)
        case int() | float():
            snapshot = CalendarSnapshot.from_timestamp(when)
        case None:
            snapshot = CalendarSnapshot.from_datetime((clock or SystemClock()).now())
        case _:
            raise TypeError(f"cannot read a calendar snapshot from {when!r}")
    return should_run(expression, snapshot)


def expand_expression(expression: str, *, year: int | None = None) -> dict[str, list[int]]:
    """Expand every field of *expression*.

    A missing year field stands for *year* when given, else for any year.
    """
    tokens = split_expression(expression)
    if len(tokens) == 5:
        tokens.append("*" if year is None else str(year))
    return {spec.name: _expand_field(spec.name, token) for spec, token in zip(FIELDS, tokens)}


def empty_fields(expression: str) -> list[str]:
    """Names of fields that expand to nothing and so can never match."""
    return [name for name, values in expand_expression(expression).items() if not values]


def _expand_field(field_name: str, token: str) -> list[int]:
    bounds = field_spec(field_name).bounds
    try:
        return expand(token, bounds.lower, bounds.upper)
    except InvalidBounds as exc:
        raise InvalidFieldSegment(field_name) from exc


def parse_minute(minute: str) -> list[int]:
    return _expand_field("minute", minute)


def parse_hour(hour: str) -> list[int]:
    return _expand_field("hour", hour)


def parse_day_of_month(day_of_month: str) -> list[int]:
    return _expand_field("day_of_month", day_of_month)


def parse_month(month: str) -> list[int]:
    return _expand_field("month", month)


def parse_day_of_week(day_of_week: str) -> list[int]:
    return _expand_field("day_of_week", day_of_week)


def parse_year(year: str) -> list[int]:
    return _expand_field("year", year)
