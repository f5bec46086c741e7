"""Interval properties and relation filters.

A :class:`Property` reads one value off an interval. Comparing a property
with a constant (or another property) builds a :class:`Filter`::

    long_genes = genes & (length >= 1000)

Relation filters keep the intervals standing in a given relation to a
fixed reference::

    inside = genes & related("during", window)
"""

import operator as op
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from typing import Any, Generic, Hashable, override

from ralgebra.core import Filter
from ralgebra.interval import Interval, IvlIn
from ralgebra.relations import Relation, overlap


class Property(ABC, Generic[IvlIn]):
    @abstractmethod
    def apply(self, event: IvlIn) -> Any:
        pass

    def _compare(
        self, other: "Property[IvlIn] | Any", operator: Callable[[Any, Any], bool]
    ) -> "Comparison[IvlIn]":
        return Comparison(self, operator, other)

    def __lt__(self, other: "Property[IvlIn] | Any") -> "Comparison[IvlIn]":
        return self._compare(other, op.lt)

    def __le__(self, other: "Property[IvlIn] | Any") -> "Comparison[IvlIn]":
        return self._compare(other, op.le)

    def __gt__(self, other: "Property[IvlIn] | Any") -> "Comparison[IvlIn]":
        return self._compare(other, op.gt)

    def __ge__(self, other: "Property[IvlIn] | Any") -> "Comparison[IvlIn]":
        return self._compare(other, op.ge)

    @override
    def __eq__(self, other: Any) -> "Comparison[IvlIn]":  # type: ignore[override]
        return self._compare(other, op.eq)

    @override
    def __ne__(self, other: Any) -> "Comparison[IvlIn]":  # type: ignore[override]
        return self._compare(other, op.ne)


class Comparison(Filter[IvlIn]):
    """``operator(prop(event), other)``, where ``other`` may be a property too."""

    def __init__(
        self,
        prop: Property[IvlIn],
        operator: Callable[[Any, Any], bool],
        other: Property[IvlIn] | Any,
    ):
        self.prop: Property[IvlIn] = prop
        self.operator: Callable[[Any, Any], bool] = operator
        self.other: Property[IvlIn] | Any = other

    @override
    def apply(self, event: IvlIn) -> bool:
        other = self.other
        if isinstance(other, Property):
            other = other.apply(event)
        return self.operator(self.prop.apply(event), other)


class Membership(Filter[IvlIn]):
    def __init__(self, prop: Property[IvlIn], values: Iterable[Hashable]):
        self.prop: Property[IvlIn] = prop
        self.values: frozenset[Hashable] = frozenset(values)

    @override
    def apply(self, event: IvlIn) -> bool:
        return self.prop.apply(event) in self.values


class Bound(Property[Interval]):
    """One of an interval's bounds: ``start``, ``end`` or ``open_end``."""

    def __init__(self, name: str):
        self.name: str = name

    @override
    def apply(self, event: Interval) -> Any:
        return getattr(event, self.name)


class Length(Property[Interval]):
    """Number of values in the interval (a timedelta for temporal bounds)."""

    @override
    def apply(self, event: Interval) -> Any:
        return event.open_end - event.start


start: Bound = Bound("start")
end: Bound = Bound("end")
open_end: Bound = Bound("open_end")
length: Length = Length()


class RelationFilter(Filter[Interval]):
    """Keep intervals ``x`` for which ``relation(x, reference)`` holds."""

    def __init__(self, relation: Relation, reference: Interval | Any):
        self.relation: Relation = relation
        self.reference: Interval | Any = reference

    @override
    def apply(self, event: Interval) -> bool:
        return self.relation.holds(event, self.reference)


class Overlapping(Filter[Interval]):
    def __init__(self, reference: Interval | Any):
        self.reference: Interval | Any = reference

    @override
    def apply(self, event: Interval) -> bool:
        return overlap(event, self.reference)


def related(relation: Relation | str, reference: Interval | Any) -> RelationFilter:
    """Filter intervals standing in ``relation`` to ``reference``.

    Args:
        relation: A :class:`Relation` member or its name (e.g. ``"during"``)
        reference: Interval or point the filtered intervals are compared with

    Example:
        >>> window = Interval(start=100, end=200)
        >>> inside = genes & related("during", window)
    """
    if isinstance(relation, str):
        try:
            relation = Relation(relation.lower())
        except ValueError:
            valid = ", ".join(r.value for r in Relation)
            raise ValueError(
                f"Invalid relation name '{relation}'. Valid relations: {valid}"
            ) from None
    return RelationFilter(relation, reference)


def overlapping(reference: Interval | Any) -> Overlapping:
    """Filter intervals sharing at least one value with ``reference``."""
    return Overlapping(reference)


def one_of(prop: Property[IvlIn], values: Iterable[Hashable]) -> Membership[IvlIn]:
    return Membership(prop, values)
