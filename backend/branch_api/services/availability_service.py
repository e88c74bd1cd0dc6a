from datetime import datetime

from ..core.clock import Clock, system_clock
from ..domain.schedule import DayOfWeek, WeeklySchedule


def is_open_at(schedule: WeeklySchedule, at: datetime) -> bool:
    """Whether a branch with ``schedule`` is open at the instant ``at``.

    Only ``at``'s own weekday entry is consulted. A missing entry, a closed
    day, or an entry lacking either time all count as closed. A closing time
    earlier than the opening time is an overnight window, open from the
    opening time through midnight until the closing time.

    Same-day windows exclude both boundaries (09:00-18:00 is closed at
    exactly 09:00 and at 18:00). Overnight windows include the opening
    instant and exclude the closing one.
    """
    entry = schedule.entry_for(DayOfWeek.of(at))
    if entry is None or entry.is_closed:
        return False
    if entry.opens_at is None or entry.closes_at is None:
        return False

    opens = datetime.combine(at.date(), entry.opens_at, tzinfo=at.tzinfo)
    closes = datetime.combine(at.date(), entry.closes_at, tzinfo=at.tzinfo)

    if closes < opens:
        return at >= opens or at < closes
    return opens < at < closes


def is_open_now(schedule: WeeklySchedule, clock: Clock = system_clock) -> bool:
    return is_open_at(schedule, clock())
