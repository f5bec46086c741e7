import bisect
import heapq
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from functools import reduce
from typing import Any, Generic, override

from ralgebra.interval import Interval, IvlIn, IvlOut
from ralgebra.relations import includes_value

logger = logging.getLogger(__name__)


def _sort_key(interval: Interval) -> tuple[Any, Any]:
    return (interval.start, interval.open_end)


def _operator_error(symbol: str, left: object, right: object) -> TypeError:
    return TypeError(
        f"Unsupported operand for {symbol}: "
        f"{type(left).__name__} {symbol} {type(right).__name__}\n"
        f"Hint: Filter a timeline with &: genes & overlapping(window)\n"
        f"      Merge timelines with |: genes_a | genes_b\n"
        f"      Combine filters with & | ~: related('before', w) | related('after', w)"
    )


class Timeline(ABC, Generic[IvlOut]):
    """A sorted, queryable collection of intervals."""

    @abstractmethod
    def fetch(self, start: Any | None, end: Any | None) -> Iterable[IvlOut]:
        """Yield intervals touching the closed window [start, end].

        Intervals come ordered by (start, open_end). A None bound is unbounded.
        """
        pass

    def __getitem__(self, item: slice) -> Iterable[IvlOut]:
        if not isinstance(item, slice):
            raise TypeError(
                f"Timeline indices must be slices, got {type(item).__name__!r}.\n"
                f"Hint: Use timeline[start:end] for a window,\n"
                f"      or timeline.covering(value) for the intervals holding a value"
            )
        return self.fetch(item.start, item.stop)

    def covering(self, value: Interval | Any) -> Iterable[IvlOut]:
        """Yield intervals that include ``value`` (a point or a whole interval)."""
        if isinstance(value, Interval):
            window_start, window_end = value.start, value.end
        else:
            window_start = window_end = value
        return (
            event
            for event in self.fetch(window_start, window_end)
            if includes_value(event, value)
        )

    def __or__(self, other: "Timeline[IvlOut]") -> "Timeline[IvlOut]":
        if not isinstance(other, Timeline):
            raise _operator_error("|", self, other)
        return Union(self, other)

    def __and__(self, other: "Filter[IvlOut]") -> "Timeline[IvlOut]":
        if not isinstance(other, Filter):
            raise _operator_error("&", self, other)
        return Filtered(self, other)


class Filter(ABC, Generic[IvlIn]):
    """A predicate over single intervals, composable with &, | and ~."""

    @abstractmethod
    def apply(self, event: IvlIn) -> bool:
        pass

    def __and__(
        self, other: "Filter[IvlIn] | Timeline[IvlIn]"
    ) -> "Filter[IvlIn] | Timeline[IvlIn]":
        if isinstance(other, Timeline):
            return Filtered(other, self)
        if not isinstance(other, Filter):
            raise _operator_error("&", self, other)
        return AllOf(self, other)

    def __or__(self, other: "Filter[IvlIn]") -> "Filter[IvlIn]":
        if not isinstance(other, Filter):
            raise _operator_error("|", self, other)
        return AnyOf(self, other)

    def __invert__(self) -> "Filter[IvlIn]":
        return Not(self)


class AnyOf(Filter[IvlIn]):
    def __init__(self, *filters: Filter[IvlIn]):
        # (a | b) | c keeps a single flat tuple
        self.filters: tuple[Filter[IvlIn], ...] = tuple(
            inner
            for f in filters
            for inner in (f.filters if isinstance(f, AnyOf) else (f,))
        )

    @override
    def apply(self, event: IvlIn) -> bool:
        return any(f.apply(event) for f in self.filters)


class AllOf(Filter[IvlIn]):
    def __init__(self, *filters: Filter[IvlIn]):
        self.filters: tuple[Filter[IvlIn], ...] = tuple(
            inner
            for f in filters
            for inner in (f.filters if isinstance(f, AllOf) else (f,))
        )

    @override
    def apply(self, event: IvlIn) -> bool:
        return all(f.apply(event) for f in self.filters)


class Not(Filter[IvlIn]):
    def __init__(self, inner: Filter[IvlIn]):
        self.inner: Filter[IvlIn] = inner

    @override
    def apply(self, event: IvlIn) -> bool:
        return not self.inner.apply(event)


class Union(Timeline[IvlOut]):
    def __init__(self, *sources: Timeline[IvlOut]):
        self.sources: tuple[Timeline[IvlOut], ...] = sources

    @override
    def fetch(self, start: Any | None, end: Any | None) -> Iterable[IvlOut]:
        streams = [source.fetch(start, end) for source in self.sources]
        return heapq.merge(*streams, key=_sort_key)


class Filtered(Timeline[IvlOut]):
    def __init__(self, source: Timeline[IvlOut], filter: "Filter[IvlOut]"):
        self.source: Timeline[IvlOut] = source
        self.filter: Filter[IvlOut] = filter

    @override
    def fetch(self, start: Any | None, end: Any | None) -> Iterable[IvlOut]:
        return (e for e in self.source.fetch(start, end) if self.filter.apply(e))


class StaticTimeline(Timeline[IvlOut]):
    """Timeline backed by a fixed collection of intervals."""

    def __init__(self, intervals: Sequence[IvlOut]):
        self._intervals: tuple[IvlOut, ...] = tuple(sorted(intervals, key=_sort_key))

        # max_open_end_prefix[i] = max(interval.open_end for interval in intervals[:i+1])
        self._max_open_end_prefix: list[Any] = []
        for interval in self._intervals:
            if self._max_open_end_prefix:
                max_so_far = max(self._max_open_end_prefix[-1], interval.open_end)
            else:
                max_so_far = interval.open_end
            self._max_open_end_prefix.append(max_so_far)

    def __len__(self) -> int:
        return len(self._intervals)

    @override
    def fetch(self, start: Any | None, end: Any | None) -> Iterable[IvlOut]:
        logger.debug(
            "Fetching [%r, %r] from %d intervals", start, end, len(self._intervals)
        )
        if not self._intervals:
            return

        start_idx = 0
        end_idx = len(self._intervals)

        # Everything before the first open end past start ends too early
        if start is not None:
            start_idx = bisect.bisect_right(self._max_open_end_prefix, start)

        # Stop at the first interval starting after end
        if end is not None:
            end_idx = bisect.bisect_right(
                self._intervals, end, key=lambda interval: interval.start
            )

        for interval in self._intervals[start_idx:end_idx]:
            if start is not None and interval.open_end <= start:
                continue
            yield interval


def union(*timelines: "Timeline[IvlOut]") -> "Timeline[IvlOut]":
    """Compose timelines with union semantics (equivalent to chaining `|`)."""

    if not timelines:
        raise ValueError(
            f"union() requires at least one timeline argument.\n"
            f"Example: union(genes_a, genes_b, genes_c)"
        )

    def reducer(acc: "Timeline[IvlOut]", nxt: "Timeline[IvlOut]"):
        return acc | nxt

    return reduce(reducer, timelines)


def timeline(*intervals: IvlOut) -> StaticTimeline[IvlOut]:
    """Create a timeline from a collection of intervals.

    Example:
        >>> from ralgebra import Interval, timeline
        >>> genes = timeline(
        ...     Interval(start=190, end=255),
        ...     Interval(start=337, end=2799),
        ... )
        >>> list(genes.covering(200))
        [Interval(start=190, end=255, end_exclusive=False)]
    """
    return StaticTimeline(intervals)
