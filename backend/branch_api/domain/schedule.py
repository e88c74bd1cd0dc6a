"""Weekly opening-hours data for a single branch.

Pure value objects: no database or clock access. A ``WeeklySchedule`` is a
snapshot materialized from persisted working-hour rows and handed to the
availability evaluator by value.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import IntEnum
from types import MappingProxyType
from typing import Callable, Iterable, Iterator, Mapping


class DayOfWeek(IntEnum):
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @classmethod
    def of(cls, value: date | datetime) -> "DayOfWeek":
        # Python weekday() is Monday=0; this enum counts from Sunday
        return cls((value.weekday() + 1) % 7)

    @classmethod
    def today(cls, clock: Callable[[], datetime]) -> "DayOfWeek":
        return cls.of(clock())

    @property
    def label(self) -> str:
        return self.name.capitalize()


@dataclass(frozen=True)
class DayEntry:
    weekday: DayOfWeek
    is_closed: bool = False
    opens_at: time | None = None
    closes_at: time | None = None

    @property
    def is_complete(self) -> bool:
        return self.opens_at is not None and self.closes_at is not None

    @property
    def is_overnight(self) -> bool:
        return self.is_complete and self.closes_at < self.opens_at


@dataclass(frozen=True)
class WeeklySchedule:
    """Up to seven day entries keyed by weekday.

    A weekday without an entry is absent, which is distinct from an explicit
    closed entry even though both evaluate as closed.
    """

    entries: Mapping[DayOfWeek, DayEntry] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    @classmethod
    def from_entries(cls, entries: Iterable[DayEntry]) -> "WeeklySchedule":
        by_day: dict[DayOfWeek, DayEntry] = {}
        for entry in entries:
            day = DayOfWeek(entry.weekday)
            if day in by_day:
                raise ValueError(f"duplicate entry for {day.label}")
            by_day[day] = entry
        return cls(by_day)

    @classmethod
    def empty(cls) -> "WeeklySchedule":
        return cls({})

    def entry_for(self, weekday: DayOfWeek | int) -> DayEntry | None:
        try:
            day = DayOfWeek(weekday)
        except ValueError:
            return None
        return self.entries.get(day)

    def __contains__(self, weekday: object) -> bool:
        return weekday in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[DayEntry]:
        for day in sorted(self.entries):
            yield self.entries[day]
