"""Usage data model shared by the delta engine, history store, and loop."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

# Bytes per megabyte in history files
BYTES_PER_MB: int = 1048576


@dataclass(frozen=True)
class ByteCounterPair:
    """Received/transmitted byte counts.

    Either a raw cumulative kernel reading or an accumulated delta,
    depending on where it is used.
    """

    received: int = 0
    transmitted: int = 0

    @property
    def total(self) -> int:
        """Sum of received and transmitted bytes."""
        return self.received + self.transmitted

    def __add__(self, other: ByteCounterPair) -> ByteCounterPair:
        return ByteCounterPair(
            received=self.received + other.received,
            transmitted=self.transmitted + other.transmitted,
        )

    def __bool__(self) -> bool:
        return self.received > 0 or self.transmitted > 0


# Date string (YYYY-MM-DD) -> bytes used that day
DailyHistory = dict[str, ByteCounterPair]


class InterfaceCategory(enum.Enum):
    """Interface category and its on-disk naming."""

    PHYSICAL = "Physical"
    VIRTUAL = "Virtual"

    @property
    def folder_name(self) -> str:
        """Directory holding per-interface files for this category."""
        return f"{self.value}Interfaces"

    @property
    def aggregate_name(self) -> str:
        """File name of the category-wide total inside ``folder_name``."""
        return f"Total{self.value}Usage"


def accumulate(history: DailyHistory, date: str, delta: ByteCounterPair) -> None:
    """Add ``delta`` into ``history[date]``, creating the entry at zero."""
    history[date] = history.get(date, ByteCounterPair()) + delta


@dataclass
class InterfaceState:
    """Tracked state for one interface since process start."""

    is_first_measurement: bool = True
    last: ByteCounterPair = field(default_factory=ByteCounterPair)
    history: DailyHistory = field(default_factory=dict)


@dataclass
class AggregateState:
    """Category-wide daily totals."""

    category: InterfaceCategory
    history: DailyHistory = field(default_factory=dict)

    def add(self, date: str, delta: ByteCounterPair) -> None:
        accumulate(self.history, date, delta)
