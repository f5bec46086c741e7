"""Successor functions for discrete ordered domains.

Closed and half-open intervals are compared by normalising their end bound
to the first value past the interval. That needs a successor: the next
value of the domain. Integers, dates and datetimes get one by default;
any other type either exposes a ``succ()`` method or the caller supplies a
successor explicitly. Floats deliberately have none.
"""

from collections.abc import Callable
from datetime import date, datetime
from functools import singledispatch
from typing import Any, TypeAlias

from dateutil.relativedelta import relativedelta

from ralgebra.util import DATE_RESOLUTION, DATETIME_RESOLUTION

Successor: TypeAlias = Callable[[Any], Any]

_STEP_FIELDS = ("years", "months", "days", "hours", "minutes", "seconds", "microseconds")
_ABSOLUTE_FIELDS = frozenset(
    {
        "year",
        "month",
        "day",
        "weekday",
        "yearday",
        "nlyearday",
        "hour",
        "minute",
        "second",
        "microsecond",
    }
)


@singledispatch
def succ(value: Any) -> Any:
    """Return the value immediately following ``value`` in its domain.

    Raises:
        TypeError: If the domain has no natural successor
    """
    method = getattr(value, "succ", None)
    if callable(method):
        return method()
    raise TypeError(
        f"No successor is defined for {type(value).__name__!r} values.\n"
        f"Got: {value!r}\n"
        f"Hint: Pass one explicitly when building the interval:\n"
        f"  Interval(start=..., end=..., successor=lambda v: v.next())\n"
        f"  # or, for dates and datetimes at a custom resolution:\n"
        f"  Interval(start=..., end=..., successor=step(minutes=15))"
    )


@succ.register
def _(value: int) -> int:
    return value + 1


@succ.register
def _(value: bool) -> Any:
    raise TypeError(
        f"No successor is defined for bool values.\n"
        f"Got: {value!r}\n"
        f"Hint: Use integers (0, 1) for interval bounds"
    )


@succ.register
def _(value: float) -> Any:
    raise TypeError(
        f"No successor is defined for float values (the domain is not discrete).\n"
        f"Got: {value!r}\n"
        f"Hint: Use integers, or supply a successor for your resolution:\n"
        f"  Interval(start=0.0, end=1.0, successor=lambda v: v + 0.001)"
    )


@succ.register
def _(value: date) -> date:
    return value + DATE_RESOLUTION


@succ.register
def _(value: datetime) -> datetime:
    return value + DATETIME_RESOLUTION


def has_successor(value: Any) -> bool:
    """True if :func:`succ` knows how to advance ``value``."""
    try:
        succ(value)
    except TypeError:
        return False
    return True


def step(**offset: int) -> Successor:
    """Return a successor that advances by a fixed calendar offset.

    Only relative fields are accepted. Offsets mixing signs (``days=1,
    hours=-1``) are allowed; whether they move a given value forward is
    checked when an interval is built with them.

    Args:
        **offset: Relative keyword arguments for ``dateutil.relativedelta``
            (e.g. ``minutes=15``, ``months=1``)

    Returns:
        A function mapping a date/datetime to the next one at that resolution

    Raises:
        ValueError: If the offset is zero, never moves forward, or sets an
            absolute field such as ``day=1``

    Example:
        >>> quarter_hour = step(minutes=15)
        >>> Interval(start=t0, end=t1, successor=quarter_hour)
    """
    absolute = sorted(name for name in offset if name in _ABSOLUTE_FIELDS)
    if absolute:
        raise ValueError(
            f"step() takes relative offsets only, got {', '.join(absolute)}.\n"
            f"Absolute fields replace part of the value instead of advancing it.\n"
            f"Hint: Use the plural form, e.g. step(days=1) instead of step(day=1)"
        )
    delta = relativedelta(**offset)
    if not delta:
        raise ValueError(
            f"step() requires a non-zero offset, got {offset!r}.\n"
            f"Example: step(days=1), step(minutes=15)"
        )
    if all(getattr(delta, name) <= 0 for name in _STEP_FIELDS):
        raise ValueError(
            f"step() requires a forward offset, got {offset!r}.\n"
            f"A successor must return a value strictly after its input."
        )

    def advance(value: Any) -> Any:
        return value + delta

    return advance
