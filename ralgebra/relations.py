"""Allen's interval relations for discrete intervals.

There are thirteen mutually exclusive ways two non-empty intervals can sit on
a line. Each is a plain predicate ``relation(a, b) -> bool`` here, plus four
composites that OR primitives together.

Closed and half-open ends are normalised through ``open_end`` (the first
value past the interval), so ``[1, 10]`` and ``[1, 11)`` behave identically
everywhere::

    before                 |A------|
                                     |B------|

    meets_beginning_of     |A------|
                                   |B------|

    overlaps_beginning_of  |A------|
                                |B------|

    starts                 |A------|
                           |B-----------|

    during                     |A------|
                           |B-------------|

    finishes                    |A------|
                           |B-----------|

    equal                  |A------|
                           |B------|

Their converses are ``after``, ``meets_end_of``, ``overlaps_end_of``,
``started_by``, ``contains`` and ``finished_by``.

Some relations also accept a scalar point for ``b``, treated as the
degenerate interval ``[b, b]``. The rest need a genuine interval and return
False for a point (no point can stand in those positions anyway).
"""

import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

from ralgebra.interval import Interval

logger = logging.getLogger(__name__)


def _as_interval(a: Interval, b: Interval | Any) -> Interval:
    if isinstance(b, Interval):
        return b
    return Interval.point(b, successor=a.successor)


def before(a: Interval, b: Interval | Any) -> bool:
    """``a`` ends, with a gap, before ``b`` begins. Same as ``after(b, a)``."""
    b = _as_interval(a, b)
    return a.open_end < b.start


def after(a: Interval, b: Interval | Any) -> bool:
    """``a`` begins, with a gap, after ``b`` ends. Same as ``before(b, a)``."""
    b = _as_interval(a, b)
    return b.open_end < a.start


def meets_beginning_of(a: Interval, b: Interval | Any) -> bool:
    """``b`` begins exactly where ``a`` ends. Same as ``meets_end_of(b, a)``."""
    b = _as_interval(a, b)
    return a.open_end == b.start


def meets_end_of(a: Interval, b: Interval | Any) -> bool:
    """``b`` ends exactly where ``a`` begins. Same as ``meets_beginning_of(b, a)``."""
    b = _as_interval(a, b)
    return b.open_end == a.start


def overlaps_beginning_of(a: Interval, b: Interval | Any) -> bool:
    """``a`` starts first and ends inside ``b``.

    ``[1, 10]`` overlaps the beginning of ``[10, 11]``: they share 10.
    """
    if not isinstance(b, Interval):
        return False
    return a.start < b.start < a.open_end < b.open_end


def overlaps_end_of(a: Interval, b: Interval | Any) -> bool:
    if not isinstance(b, Interval):
        return False
    return overlaps_beginning_of(b, a)


def during(a: Interval, b: Interval | Any) -> bool:
    """``a`` fits strictly inside ``b``. Same as ``contains(b, a)``."""
    if not isinstance(b, Interval):
        return False
    return b.start < a.start and a.open_end < b.open_end


def contains(a: Interval, b: Interval | Any) -> bool:
    """``b`` fits strictly inside ``a``, touching neither end."""
    b = _as_interval(a, b)
    return a.start < b.start and b.open_end < a.open_end


def starts(a: Interval, b: Interval | Any) -> bool:
    """Same beginning, ``b`` lasts longer. Same as ``started_by(b, a)``."""
    if not isinstance(b, Interval):
        return False
    return a.start == b.start and a.open_end < b.open_end


def started_by(a: Interval, b: Interval | Any) -> bool:
    b = _as_interval(a, b)
    return starts(b, a)


def finishes(a: Interval, b: Interval | Any) -> bool:
    """Same end, ``a`` begins later. Same as ``finished_by(b, a)``."""
    if not isinstance(b, Interval):
        return False
    return b.start < a.start and a.open_end == b.open_end


def finished_by(a: Interval, b: Interval | Any) -> bool:
    b = _as_interval(a, b)
    return finishes(b, a)


def equal(a: Interval, b: Interval | Any) -> bool:
    """Same values, regardless of how the end bound is written."""
    b = _as_interval(a, b)
    return a.start == b.start and a.open_end == b.open_end


# Composites


def less_or_equal(a: Interval, b: Interval | Any) -> bool:
    return before(a, b) or meets_beginning_of(a, b)


def greater_or_equal(a: Interval, b: Interval | Any) -> bool:
    return after(a, b) or meets_end_of(a, b)


def between(a: Interval, b: Interval | Any) -> bool:
    """``a`` lies within ``b`` without being equal to it."""
    return starts(a, b) or during(a, b) or finishes(a, b)


def includes_value(a: Interval, b: Interval | Any) -> bool:
    """``b`` lies within ``a``, possibly equal to it."""
    return started_by(a, b) or contains(a, b) or equal(a, b) or finished_by(a, b)


def overlap(a: Interval, b: Interval | Any) -> bool:
    """``a`` and ``b`` share at least one value."""
    return not (less_or_equal(a, b) or greater_or_equal(a, b))


class Relation(Enum):
    """The thirteen primitive relations, in the order :func:`relate` tries them."""

    BEFORE = "before"
    AFTER = "after"
    MEETS_BEGINNING_OF = "meets_beginning_of"
    MEETS_END_OF = "meets_end_of"
    OVERLAPS_BEGINNING_OF = "overlaps_beginning_of"
    OVERLAPS_END_OF = "overlaps_end_of"
    DURING = "during"
    CONTAINS = "contains"
    STARTS = "starts"
    STARTED_BY = "started_by"
    FINISHES = "finishes"
    FINISHED_BY = "finished_by"
    EQUAL = "equal"

    @property
    def predicate(self) -> Callable[[Interval, Any], bool]:
        return _PREDICATES[self]

    @property
    def converse(self) -> "Relation":
        """The relation that holds for ``(b, a)`` when this one holds for ``(a, b)``."""
        return _CONVERSES[self]

    def holds(self, a: Interval, b: Interval | Any) -> bool:
        return _PREDICATES[self](a, b)


_PREDICATES: dict[Relation, Callable[[Interval, Any], bool]] = {
    Relation.BEFORE: before,
    Relation.AFTER: after,
    Relation.MEETS_BEGINNING_OF: meets_beginning_of,
    Relation.MEETS_END_OF: meets_end_of,
    Relation.OVERLAPS_BEGINNING_OF: overlaps_beginning_of,
    Relation.OVERLAPS_END_OF: overlaps_end_of,
    Relation.DURING: during,
    Relation.CONTAINS: contains,
    Relation.STARTS: starts,
    Relation.STARTED_BY: started_by,
    Relation.FINISHES: finishes,
    Relation.FINISHED_BY: finished_by,
    Relation.EQUAL: equal,
}

_CONVERSES: dict[Relation, Relation] = {
    Relation.BEFORE: Relation.AFTER,
    Relation.AFTER: Relation.BEFORE,
    Relation.MEETS_BEGINNING_OF: Relation.MEETS_END_OF,
    Relation.MEETS_END_OF: Relation.MEETS_BEGINNING_OF,
    Relation.OVERLAPS_BEGINNING_OF: Relation.OVERLAPS_END_OF,
    Relation.OVERLAPS_END_OF: Relation.OVERLAPS_BEGINNING_OF,
    Relation.DURING: Relation.CONTAINS,
    Relation.CONTAINS: Relation.DURING,
    Relation.STARTS: Relation.STARTED_BY,
    Relation.STARTED_BY: Relation.STARTS,
    Relation.FINISHES: Relation.FINISHED_BY,
    Relation.FINISHED_BY: Relation.FINISHES,
    Relation.EQUAL: Relation.EQUAL,
}


def relate(a: Interval, b: Interval | Any) -> Relation:
    """Return the single primitive relation holding between ``a`` and ``b``.

    Raises:
        ValueError: If no relation holds, which only happens when the bound
            domain is not totally ordered or its successor is not monotonic
    """
    b = _as_interval(a, b)
    for relation in Relation:
        if relation.holds(a, b):
            return relation
    logger.debug("No relation between %s and %s", a, b)
    raise ValueError(
        f"No interval relation holds between {a} and {b}.\n"
        f"The bounds must come from a totally ordered domain and the "
        f"successor must return a strictly greater value."
    )
