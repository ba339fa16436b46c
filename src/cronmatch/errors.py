"""Errors raised while evaluating cron expressions."""

from __future__ import annotations


class CronError(ValueError):
    pass


class InvalidBounds(CronError):
    """Field bounds where the upper limit is not above the lower one."""

    def __init__(self, lower: int, upper: int) -> None:
        super().__init__(f"invalid field bounds: upper ({upper}) must exceed lower ({lower})")
        self.lower = lower
        self.upper = upper


class MalformedExpression(CronError):
    """Expression does not split into 5 or 6 fields."""

    def __init__(self, expression: str, field_count: int) -> None:
        super().__init__(
            f"invalid cron expression {expression!r}: "
            f"expected 5 or 6 fields, got {field_count}"
        )
        self.expression = expression
        self.field_count = field_count


class InvalidFieldSegment(CronError):
    def __init__(self, field_name: str) -> None:
        super().__init__(f"invalid cron expression: invalid segment for {field_name}")
        self.field_name = field_name
