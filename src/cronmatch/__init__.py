"""Cron expression expansion and time matching."""

from __future__ import annotations

from .calendar import CalendarSnapshot, Clock, FixedClock, SystemClock
from .errors import CronError, InvalidBounds, InvalidFieldSegment, MalformedExpression
from .expand import expand
from .matcher import (
    empty_fields,
    expand_expression,
    should_run,
    should_run_at,
    split_expression,
)

__version__ = "0.1.0"

__all__ = [
    "CalendarSnapshot",
    "Clock",
    "CronError",
    "FixedClock",
    "InvalidBounds",
    "InvalidFieldSegment",
    "MalformedExpression",
    "SystemClock",
    "empty_fields",
    "expand",
    "expand_expression",
    "should_run",
    "should_run_at",
    "split_expression",
]
