"""Expansion of a single cron field into the integers it denotes.

A field is parsed into one of a small closed set of terms::

    5          Literal
    *          Wildcard
    1-5,10     ListTerm (each item is a term of its own)
    3-59/15    Step (base term, increment)
    9-17       Range
    anything   Invalid

and the term is then evaluated against the field's inclusive bounds.
Unrecognised syntax expands to nothing instead of raising, so callers
that want strict validation have to check for empty results themselves.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import InvalidBounds

# Numbers wider than nine digits are never in range and stay Invalid.
_LITERAL_RE = re.compile(r"\d{1,9}", re.ASCII)
_STEP_RE = re.compile(r"(?P<base>[*\d,-]+)/(?P<increment>[\d,-]+)", re.ASCII)
_RANGE_RE = re.compile(r"(?P<start>\d{1,9})-(?P<end>\d{1,9})", re.ASCII)


@dataclass(frozen=True, slots=True)
class Literal:
    value: int


@dataclass(frozen=True, slots=True)
class Wildcard:
    pass


@dataclass(frozen=True, slots=True)
class ListTerm:
    items: tuple[Term, ...]


@dataclass(frozen=True, slots=True)
class Step:
    base: Term
    increment: str


@dataclass(frozen=True, slots=True)
class Range:
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class Invalid:
    text: str


Term = Literal | Wildcard | ListTerm | Step | Range | Invalid


def parse_term(expr: str) -> Term:
    """Classify a field expression. The first matching form wins."""
    if _LITERAL_RE.fullmatch(expr):
        return Literal(int(expr))
    if expr == "*":
        return Wildcard()
    if "," in expr:
        return ListTerm(tuple(parse_term(item) for item in expr.split(",")))
    if match := _STEP_RE.fullmatch(expr):
        return Step(parse_term(match["base"]), match["increment"])
    if match := _RANGE_RE.fullmatch(expr):
        return Range(int(match["start"]), int(match["end"]))
    return Invalid(expr)


def expand(expr: str, lower: int, upper: int) -> list[int]:
    """Return the ascending, deduplicated values of *expr* within bounds.

    Raises :class:`InvalidBounds` when ``upper <= lower``.
    """
    if upper <= lower:
        raise InvalidBounds(lower, upper)
    return sorted(_evaluate(parse_term(expr), lower, upper))


def _evaluate(term: Term, lower: int, upper: int) -> set[int]:
    match term:
        case Literal(value=value):
            return {value} if lower <= value <= upper else set()
        case Wildcard():
            return set(range(lower, upper + 1))
        case ListTerm(items=items):
            values: set[int] = set()
            for item in items:
                values |= _evaluate(item, lower, upper)
            return values
        case Step(base=base, increment=increment):
            return _step(_evaluate(base, lower, upper), increment)
        case Range(start=start, end=end):
            if not (lower <= start <= upper and lower <= end <= upper):
                return set()
            return set(range(start, end + 1))
        case _:
            return set()


def _step(base_range: set[int], increment: str) -> set[int]:
    """Keep the members of *base_range* a whole number of steps above its minimum.

    ``{3..59}`` with increment ``15`` gives ``{3, 18, 33, 48}``.
    """
    if not base_range or not _LITERAL_RE.fullmatch(increment):
        return set()
    step = int(increment)
    if step < 1:
        return set()
    anchor = min(base_range)
    return {value for value in base_range if (value - anchor) % step == 0}
