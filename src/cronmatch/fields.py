"""Field kinds of a cron expression and their inclusive bounds."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidBounds, InvalidFieldSegment


@dataclass(frozen=True, slots=True)
class FieldBounds:
    lower: int
    upper: int

    def __post_init__(self) -> None:
        if self.upper <= self.lower:
            raise InvalidBounds(self.lower, self.upper)

    def __contains__(self, value: object) -> bool:
        return isinstance(value, int) and self.lower <= value <= self.upper


@dataclass(frozen=True, slots=True)
class FieldSpec:
    name: str
    bounds: FieldBounds


# Evaluation order of the matcher.
FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("minute", FieldBounds(0, 59)),
    FieldSpec("hour", FieldBounds(0, 23)),
    FieldSpec("day_of_month", FieldBounds(1, 31)),
    FieldSpec("month", FieldBounds(1, 12)),
    FieldSpec("day_of_week", FieldBounds(0, 6)),  # 0=Sun
    FieldSpec("year", FieldBounds(1970, 2099)),
)

FIELD_NAMES: tuple[str, ...] = tuple(spec.name for spec in FIELDS)

_BY_NAME = {spec.name: spec for spec in FIELDS}


def field_spec(name: str) -> FieldSpec:
    try:
        return _BY_NAME[name]
    except KeyError:
        raise InvalidFieldSegment(name) from None
