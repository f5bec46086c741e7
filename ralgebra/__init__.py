from .core import Filter, StaticTimeline, Timeline, timeline, union
from .interval import Interval
from .properties import (
    Property,
    end,
    length,
    one_of,
    open_end,
    overlapping,
    related,
    start,
)
from .relations import (
    Relation,
    after,
    before,
    between,
    contains,
    during,
    equal,
    finished_by,
    finishes,
    greater_or_equal,
    includes_value,
    less_or_equal,
    meets_beginning_of,
    meets_end_of,
    overlap,
    overlaps_beginning_of,
    overlaps_end_of,
    relate,
    started_by,
    starts,
)
from .successor import has_successor, step, succ

__all__ = [
    "Interval",
    "Relation",
    "relate",
    "before",
    "after",
    "meets_beginning_of",
    "meets_end_of",
    "overlaps_beginning_of",
    "overlaps_end_of",
    "during",
    "contains",
    "starts",
    "started_by",
    "finishes",
    "finished_by",
    "equal",
    "less_or_equal",
    "greater_or_equal",
    "between",
    "includes_value",
    "overlap",
    "succ",
    "step",
    "has_successor",
    "Timeline",
    "StaticTimeline",
    "Filter",
    "Property",
    "timeline",
    "union",
    "related",
    "overlapping",
    "one_of",
    "start",
    "end",
    "open_end",
    "length",
]
