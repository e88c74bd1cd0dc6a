from datetime import time
from pydantic import BaseModel, Field


class WorkingHourIn(BaseModel):
    day_of_week: int = Field(..., ge=0, le=6, description="0=Sunday, 6=Saturday")
    opens_at: time | None = None
    closes_at: time | None = None
    is_closed: bool


class WorkingHoursUpdate(BaseModel):
    data: list[WorkingHourIn] = Field(..., min_length=1)


class OpenDayRequest(BaseModel):
    opens_at: time
    closes_at: time


class WorkingHourOut(BaseModel):
    day_of_week: int
    day_name: str
    opens_at: time | None
    closes_at: time | None
    is_closed: bool
    is_overnight: bool
