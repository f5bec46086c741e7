from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeVar

from ralgebra.successor import Successor, succ

if TYPE_CHECKING:
    from ralgebra.relations import Relation


@dataclass(frozen=True, kw_only=True)
class Interval:
    """A discrete interval with an inclusive start and a closed or open end.

    ``Interval(start=1, end=10)`` is the closed interval ``[1, 10]``;
    ``Interval(start=1, end=11, end_exclusive=True)`` is ``[1, 11)``. Both
    hold the same values and compare as equal under :func:`equal`.

    Bounds must come from a discrete ordered domain: ints, dates and
    datetimes work out of the box, other domains need ``successor``.
    """

    start: Any
    end: Any
    end_exclusive: bool = False
    successor: Successor | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        try:
            inverted = self.start > self.end
        except TypeError:
            raise TypeError(
                f"Interval bounds must be mutually orderable.\n"
                f"Got start={self.start!r} ({type(self.start).__name__}), "
                f"end={self.end!r} ({type(self.end).__name__})"
            ) from None
        if inverted:
            raise ValueError(
                f"Interval start ({self.start!r}) must be <= end ({self.end!r})"
            )
        try:
            after_end = self.succ(self.end)
        except TypeError as exc:
            raise TypeError(
                f"Interval bounds need a successor to normalise closed and "
                f"half-open ends.\n{exc}"
            ) from None
        if not after_end > self.end:
            raise ValueError(
                f"Interval successor must return a strictly greater value.\n"
                f"Got successor({self.end!r}) = {after_end!r}\n"
                f"Hint: A successor advances to the next value of the domain:\n"
                f"  Interval(start=..., end=..., successor=lambda v: v + 1)"
            )
        if not self.start < self.open_end:
            raise ValueError(
                f"Interval [{self.start!r}, {self.end!r}) is empty.\n"
                f"Hint: Use a closed interval for a single value:\n"
                f"  Interval(start={self.start!r}, end={self.start!r})"
            )

    def succ(self, value: Any) -> Any:
        """Advance ``value`` using this interval's successor."""
        if self.successor is not None:
            return self.successor(value)
        return succ(value)

    @property
    def open_end(self) -> Any:
        """First value strictly after the interval."""
        if self.end_exclusive:
            return self.end
        return self.succ(self.end)

    @classmethod
    def closed(
        cls, start: Any, end: Any, successor: Successor | None = None
    ) -> "Interval":
        return cls(start=start, end=end, successor=successor)

    @classmethod
    def half_open(
        cls, start: Any, end: Any, successor: Successor | None = None
    ) -> "Interval":
        return cls(start=start, end=end, end_exclusive=True, successor=successor)

    @classmethod
    def point(cls, value: Any, successor: Successor | None = None) -> "Interval":
        """The degenerate interval ``[value, value]``."""
        return cls(start=value, end=value, successor=successor)

    def __contains__(self, value: Any) -> bool:
        return self.start <= value < self.open_end

    def __str__(self) -> str:
        closer = ")" if self.end_exclusive else "]"
        return f"[{self.start}, {self.end}{closer}"

    # Import at runtime to avoid circular dependency

    def __lt__(self, other: Any) -> bool:
        from ralgebra.relations import before

        return before(self, other)

    def __gt__(self, other: Any) -> bool:
        from ralgebra.relations import after

        return after(self, other)

    def __le__(self, other: Any) -> bool:
        from ralgebra.relations import less_or_equal

        return less_or_equal(self, other)

    def __ge__(self, other: Any) -> bool:
        from ralgebra.relations import greater_or_equal

        return greater_or_equal(self, other)

    def equals(self, other: Any) -> bool:
        """Normalised equality: ``[1, 10]`` equals ``[1, 11)``."""
        from ralgebra.relations import equal

        return equal(self, other)

    def relation_to(self, other: Any) -> "Relation":
        from ralgebra.relations import relate

        return relate(self, other)


IvlOut = TypeVar("IvlOut", bound="Interval", covariant=True)
IvlIn = TypeVar("IvlIn", bound="Interval", contravariant=True)
