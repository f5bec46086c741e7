from collections.abc import Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar, override

import pytest

from ralgebra import Interval, Relation, timeline, union
from ralgebra.core import Timeline
from ralgebra.properties import (
    Property,
    end,
    length,
    one_of,
    open_end,
    overlapping,
    related,
    start,
)


@dataclass(frozen=True, kw_only=True)
class Gene(Interval):
    name: str
    strand: str = "primary"


class Strand(Property[Gene]):
    @override
    def apply(self, event: Gene) -> str:
        return event.strand


Ivl = TypeVar("Ivl", bound=Interval)


class DummyTimeline(Timeline[Ivl], Generic[Ivl]):
    """Simple timeline backed by a static set of intervals, scanned linearly."""

    def __init__(self, *events: Ivl):
        self._events: tuple[Ivl, ...] = tuple(
            sorted(events, key=lambda event: (event.start, event.open_end))
        )

    @override
    def fetch(self, start: int | None, end: int | None) -> Iterable[Ivl]:
        for event in self._events:
            if start is not None and event.open_end <= start:
                continue
            if end is not None and event.start > end:
                break
            yield event


GENES = timeline(
    Gene(start=190, end=255, name="thrL"),
    Gene(start=337, end=2799, name="thrA"),
    Gene(start=2801, end=3733, name="thrB"),
    Gene(start=3734, end=5020, name="thrC"),
    Gene(start=5234, end=5530, name="yaaX", strand="complementary"),
)


def test_fetch_respects_bounds() -> None:
    tl = timeline(
        Interval(start=0, end=5),
        Interval(start=10, end=15),
        Interval(start=20, end=25),
    )

    assert list(tl[:]) == [
        Interval(start=0, end=5),
        Interval(start=10, end=15),
        Interval(start=20, end=25),
    ]

    assert list(tl[9:21]) == [
        Interval(start=10, end=15),
        Interval(start=20, end=25),
    ]

    assert list(tl[:15]) == [
        Interval(start=0, end=5),
        Interval(start=10, end=15),
    ]

    assert list(tl[12:]) == [
        Interval(start=10, end=15),
        Interval(start=20, end=25),
    ]


def test_fetch_window_edges_are_inclusive() -> None:
    tl = timeline(
        Interval(start=0, end=5),
        Interval(start=10, end=15, end_exclusive=True),
    )

    assert list(tl[5:10]) == [
        Interval(start=0, end=5),
        Interval(start=10, end=15, end_exclusive=True),
    ]
    # [10, 15) does not reach 15
    assert list(tl[15:20]) == []


def test_static_timeline_matches_linear_scan() -> None:
    intervals = [
        Interval(start=0, end=40),
        Interval(start=2, end=3),
        Interval(start=5, end=9, end_exclusive=True),
        Interval(start=12, end=12),
        Interval(start=30, end=31),
    ]
    indexed = timeline(*intervals)
    scanned = DummyTimeline(*intervals)

    for lo in range(-1, 42):
        for hi in range(lo, 43):
            assert list(indexed[lo:hi]) == list(scanned[lo:hi]), (lo, hi)


def test_static_timeline_sorts_and_sizes() -> None:
    tl = timeline(Interval(start=5, end=6), Interval(start=1, end=2))

    assert len(tl) == 2
    assert list(tl[:])[0] == Interval(start=1, end=2)


def test_empty_timeline() -> None:
    assert list(timeline()[0:100]) == []


def test_integer_index_raises() -> None:
    with pytest.raises(TypeError, match="must be slices"):
        _ = timeline(Interval(start=0, end=5))[3]  # type: ignore[index]


def test_covering_point() -> None:
    assert [g.name for g in GENES.covering(200)] == ["thrL"]
    assert [g.name for g in GENES.covering(2800)] == []
    assert [g.name for g in GENES.covering(3733)] == ["thrB"]


def test_covering_interval() -> None:
    nested = timeline(
        Interval(start=0, end=100),
        Interval(start=10, end=20),
        Interval(start=15, end=30),
    )

    assert list(nested.covering(Interval(start=12, end=18))) == [
        Interval(start=0, end=100),
        Interval(start=10, end=20),
    ]
    assert list(nested.covering(Interval(start=10, end=21, end_exclusive=True))) == [
        Interval(start=0, end=100),
        Interval(start=10, end=20),
    ]


def test_union_preserves_ordering() -> None:
    left = DummyTimeline(Interval(start=0, end=5), Interval(start=10, end=12))
    right = DummyTimeline(Interval(start=3, end=4), Interval(start=20, end=22))

    merged = list((left | right)[:])

    assert merged == [
        Interval(start=0, end=5),
        Interval(start=3, end=4),
        Interval(start=10, end=12),
        Interval(start=20, end=22),
    ]


def test_union_helper_matches_operator() -> None:
    timelines = [
        DummyTimeline(Interval(start=0, end=2)),
        DummyTimeline(Interval(start=1, end=3)),
        DummyTimeline(Interval(start=5, end=6)),
    ]

    chained = timelines[0] | timelines[1] | timelines[2]
    functional = union(*timelines)

    assert list(chained[:]) == list(functional[:])


def test_union_requires_arguments() -> None:
    with pytest.raises(ValueError, match="at least one timeline"):
        union()


def test_related_filter_matches_relation() -> None:
    window = Interval(start=300, end=5100)

    inside = GENES & related(Relation.DURING, window)

    assert [g.name for g in inside[:]] == ["thrA", "thrB", "thrC"]


def test_related_accepts_relation_names() -> None:
    window = Interval(start=2801, end=3733)

    same = list((GENES & related("EQUAL", window))[:])
    met = list((GENES & related("meets_end_of", window))[:])

    assert [g.name for g in same] == ["thrB"]
    assert [g.name for g in met] == ["thrC"]


def test_related_rejects_unknown_names() -> None:
    with pytest.raises(ValueError, match="Invalid relation name"):
        related("near", Interval(start=0, end=1))


def test_related_with_point_reference() -> None:
    ends_at = GENES & related("finished_by", 3733)

    assert [g.name for g in ends_at[:]] == ["thrB"]


def test_related_agrees_with_predicate_everywhere() -> None:
    intervals = [Interval(start=s, end=e) for s in range(0, 6) for e in range(s, 6)]
    tl = timeline(*intervals)
    reference = Interval(start=2, end=4)

    for relation in Relation:
        expected = [i for i in tl[:] if relation.holds(i, reference)]
        assert list((tl & related(relation, reference))[:]) == expected


def test_overlapping_filter() -> None:
    window = Interval(start=2790, end=2810, end_exclusive=True)

    hits = GENES & overlapping(window)

    assert [g.name for g in hits[:]] == ["thrA", "thrB"]


def test_filter_combinators() -> None:
    window = Interval(start=0, end=3000)
    early = related("during", window) | related("starts", window)

    assert [g.name for g in (GENES & early)[:]] == ["thrL", "thrA"]
    assert [g.name for g in (early & GENES)[:]] == ["thrL", "thrA"]
    assert [g.name for g in (GENES & ~early)[:]] == ["thrB", "thrC", "yaaX"]
    assert [g.name for g in (GENES & (early & (start > 300)))[:]] == ["thrA"]


def test_filter_applies_property_comparisons() -> None:
    tl = DummyTimeline(
        Interval(start=5, end=10),
        Interval(start=12, end=13),
        Interval(start=20, end=25),
    )

    assert list((tl & (start >= 12))[:]) == [
        Interval(start=12, end=13),
        Interval(start=20, end=25),
    ]
    assert list((tl & (end <= 13))[:]) == [
        Interval(start=5, end=10),
        Interval(start=12, end=13),
    ]
    assert list((tl & (open_end == 14))[:]) == [Interval(start=12, end=13)]


def test_length_counts_values() -> None:
    assert length.apply(Interval(start=1, end=10)) == 10
    assert length.apply(Interval(start=1, end=11, end_exclusive=True)) == 10

    long_genes = GENES & (length >= 1000)
    assert [g.name for g in long_genes[:]] == ["thrA", "thrC"]


def test_one_of_works_with_subclassed_intervals() -> None:
    complementary = GENES & one_of(Strand(), {"complementary"})

    assert [g.name for g in complementary[:]] == ["yaaX"]


def test_property_equality_operator() -> None:
    primary = Strand() == "primary"

    assert primary.apply(Gene(start=0, end=5, name="a")) is True
    assert primary.apply(Gene(start=0, end=5, name="b", strand="complementary")) is False


def test_union_with_filter_raises() -> None:
    tl = DummyTimeline(Interval(start=0, end=5))

    with pytest.raises(TypeError, match="Unsupported operand for \\|"):
        _ = tl | (start >= 0)


def test_filter_union_with_timeline_raises() -> None:
    with pytest.raises(TypeError, match="Unsupported operand for \\|"):
        _ = (start >= 0) | DummyTimeline(Interval(start=0, end=5))


def test_timeline_intersection_raises() -> None:
    with pytest.raises(TypeError, match="Unsupported operand for &"):
        _ = GENES & DummyTimeline(Interval(start=0, end=5))


def test_filter_with_plain_value_raises() -> None:
    with pytest.raises(TypeError, match="Unsupported operand for &"):
        _ = (start >= 0) & 5


def test_chained_combinators_stay_flat() -> None:
    a, b, c = start >= 0, end <= 10, length > 1

    assert len((a | b | c).filters) == 3
    assert len((a & b & c).filters) == 3
    assert len(((a | b) & c).filters) == 2


def test_property_compared_with_property() -> None:
    tl = DummyTimeline(
        Interval(start=5, end=5),
        Interval(start=5, end=9),
    )

    assert list((tl & (end > start))[:]) == [Interval(start=5, end=9)]
    assert list((tl & (end == start))[:]) == [Interval(start=5, end=5)]
