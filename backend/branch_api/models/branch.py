from datetime import datetime
from sqlalchemy import Integer, Boolean, DateTime, JSON, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..core.db import Base
from ..domain.schedule import WeeklySchedule


class Branch(Base):
    __tablename__ = "branches"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    # locale -> text, e.g. {"ar": "...", "en": "..."}
    name: Mapped[dict] = mapped_column(JSON, nullable=False)
    address: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    description: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    working_hours = relationship(
        "BranchWorkingHour",
        back_populates="branch",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="BranchWorkingHour.day_of_week",
    )

    def weekly_schedule(self) -> WeeklySchedule:
        return WeeklySchedule.from_entries(
            hour.to_entry() for hour in self.working_hours if 0 <= hour.day_of_week <= 6
        )
