from datetime import datetime
from typing import Callable
from zoneinfo import ZoneInfo

from .config import get_settings

settings = get_settings()
LOCAL_TZ = ZoneInfo(settings.timezone)

Clock = Callable[[], datetime]


def system_clock() -> datetime:
    return datetime.now(LOCAL_TZ)


def fixed_clock(instant: datetime) -> Clock:
    """Clock that always reports ``instant``; used to pin "now"."""

    def _now() -> datetime:
        return instant

    return _now


def get_clock() -> Clock:
    # FastAPI dependency; tests swap it through app.dependency_overrides
    return system_clock
