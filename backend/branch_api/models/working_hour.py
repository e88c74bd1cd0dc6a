from datetime import datetime, time
from sqlalchemy import Integer, Boolean, DateTime, Time, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..core.db import Base
from ..domain.schedule import DayEntry, DayOfWeek


class BranchWorkingHour(Base):
    __tablename__ = "branch_working_hours"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    branch_id: Mapped[int] = mapped_column(ForeignKey("branches.id", ondelete="CASCADE"), index=True, nullable=False)
    day_of_week: Mapped[int] = mapped_column(Integer, nullable=False)  # 0 = Sunday, 6 = Saturday
    opens_at: Mapped[time | None] = mapped_column(Time, nullable=True)
    closes_at: Mapped[time | None] = mapped_column(Time, nullable=True)
    is_closed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (UniqueConstraint("branch_id", "day_of_week", name="uq_branch_working_hours_branch_day"),)

    branch = relationship("Branch", back_populates="working_hours")

    @property
    def weekday(self) -> DayOfWeek:
        return DayOfWeek(self.day_of_week)

    def to_entry(self) -> DayEntry:
        return DayEntry(
            weekday=self.weekday,
            is_closed=bool(self.is_closed),
            opens_at=self.opens_at,
            closes_at=self.closes_at,
        )
