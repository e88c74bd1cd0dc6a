import logging
import math
from datetime import datetime, time
from typing import Iterable

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from ..core.config import get_settings
from ..core.locale import translate
from ..domain.schedule import DayOfWeek
from ..models.branch import Branch
from ..models.working_hour import BranchWorkingHour
from ..schemas.branch import BranchCreate, BranchUpdate, BranchOut
from ..schemas.working_hour import WorkingHourIn, WorkingHourOut
from . import availability_service

settings = get_settings()
logger = logging.getLogger(__name__)


def resolve_per_page(per_page: int | None) -> int:
    if per_page is None:
        per_page = settings.default_per_page
    return min(max(1, per_page), settings.max_per_page)


def list_active_branches(db: Session, page: int = 1, per_page: int | None = None) -> tuple[list[Branch], dict]:
    per_page = resolve_per_page(per_page)
    page = max(1, page)
    total = db.scalar(select(func.count()).select_from(Branch).where(Branch.is_active.is_(True))) or 0
    branches = (
        db.execute(
            select(Branch)
            .where(Branch.is_active.is_(True))
            .options(selectinload(Branch.working_hours))
            .order_by(Branch.id)
            .offset((page - 1) * per_page)
            .limit(per_page)
        )
        .scalars()
        .all()
    )
    meta = {
        "current_page": page,
        "per_page": per_page,
        "total": total,
        "last_page": max(1, math.ceil(total / per_page)),
    }
    return list(branches), meta


def get_branch(db: Session, branch_id: int) -> Branch:
    branch = db.get(Branch, branch_id, options=[selectinload(Branch.working_hours)])
    if not branch:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Branch not found")
    return branch


def create_branch(db: Session, data: BranchCreate) -> Branch:
    branch = Branch(
        name=data.name,
        address=data.address,
        description=data.description,
        is_active=data.is_active,
    )
    db.add(branch)
    db.commit()
    db.refresh(branch)
    logger.info("Branch %s created", branch.id)
    return branch


def update_branch(db: Session, branch_id: int, data: BranchUpdate) -> Branch:
    branch = get_branch(db, branch_id)
    if data.name is not None:
        branch.name = data.name
    if data.address is not None:
        branch.address = data.address
    if data.description is not None:
        branch.description = data.description
    if data.is_active is not None:
        branch.is_active = data.is_active
    db.commit()
    db.refresh(branch)
    logger.info("Branch %s updated", branch.id)
    return branch


def set_branch_active(db: Session, branch_id: int, is_active: bool) -> Branch:
    branch = get_branch(db, branch_id)
    branch.is_active = is_active
    db.commit()
    db.refresh(branch)
    logger.info("Branch %s %s", branch.id, "activated" if is_active else "deactivated")
    return branch


def delete_branch(db: Session, branch_id: int) -> None:
    branch = get_branch(db, branch_id)
    db.delete(branch)
    db.commit()
    logger.info("Branch %s deleted", branch_id)


def validate_working_hours(entries: Iterable[WorkingHourIn]) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    seen: set[int] = set()
    for index, entry in enumerate(entries):
        prefix = f"data.{index}"
        if entry.day_of_week in seen:
            errors.setdefault(f"{prefix}.day_of_week", []).append("Each day may only appear once.")
        seen.add(entry.day_of_week)
        if entry.is_closed:
            if entry.opens_at is not None:
                errors.setdefault(f"{prefix}.opens_at", []).append(
                    "Opening time must be null when the day is marked as closed."
                )
            if entry.closes_at is not None:
                errors.setdefault(f"{prefix}.closes_at", []).append(
                    "Closing time must be null when the day is marked as closed."
                )
            continue
        if entry.opens_at is None:
            errors.setdefault(f"{prefix}.opens_at", []).append("Opening time is required when the day is not closed.")
        if entry.closes_at is None:
            errors.setdefault(f"{prefix}.closes_at", []).append("Closing time is required when the day is not closed.")
        if entry.opens_at is not None and entry.opens_at == entry.closes_at:
            errors.setdefault(f"{prefix}.closes_at", []).append(
                "Opening time cannot be the same as closing time."
            )
    return errors


def _raise_validation(errors: dict[str, list[str]]) -> None:
    raise HTTPException(
        status_code=422,
        detail={"message": "The given data was invalid.", "errors": errors},
    )


def _upsert_day(
    branch: Branch,
    day: DayOfWeek,
    opens_at: time | None,
    closes_at: time | None,
    is_closed: bool,
) -> BranchWorkingHour:
    row = next((hour for hour in branch.working_hours if hour.day_of_week == int(day)), None)
    if row is None:
        row = BranchWorkingHour(day_of_week=int(day))
        branch.working_hours.append(row)
    row.opens_at = opens_at
    row.closes_at = closes_at
    row.is_closed = is_closed
    return row


def _commit_hours(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Working hours for this day were changed concurrently. Please retry.",
        )
    except Exception:
        db.rollback()
        raise


def set_working_hours(db: Session, branch_id: int, entries: list[WorkingHourIn]) -> Branch:
    errors = validate_working_hours(entries)
    if errors:
        _raise_validation(errors)
    branch = get_branch(db, branch_id)
    for entry in entries:
        _upsert_day(
            branch,
            DayOfWeek(entry.day_of_week),
            None if entry.is_closed else entry.opens_at,
            None if entry.is_closed else entry.closes_at,
            entry.is_closed,
        )
    _commit_hours(db)
    db.refresh(branch)
    logger.info("Working hours set for branch %s (%d days)", branch.id, len(entries))
    return branch


def open_day(db: Session, branch_id: int, day: DayOfWeek, opens_at: time, closes_at: time) -> Branch:
    if opens_at == closes_at:
        _raise_validation({"closes_at": ["Opening time cannot be the same as closing time."]})
    branch = get_branch(db, branch_id)
    _upsert_day(branch, day, opens_at, closes_at, is_closed=False)
    _commit_hours(db)
    db.refresh(branch)
    logger.info("Branch %s opened on %s %s-%s", branch.id, day.label, opens_at, closes_at)
    return branch


def close_day(db: Session, branch_id: int, day: DayOfWeek) -> Branch:
    branch = get_branch(db, branch_id)
    _upsert_day(branch, day, None, None, is_closed=True)
    _commit_hours(db)
    db.refresh(branch)
    logger.info("Branch %s closed on %s", branch.id, day.label)
    return branch


def working_hours_out(branch: Branch) -> list[WorkingHourOut]:
    return [
        WorkingHourOut(
            day_of_week=int(entry.weekday),
            day_name=entry.weekday.label,
            opens_at=entry.opens_at,
            closes_at=entry.closes_at,
            is_closed=entry.is_closed,
            is_overnight=entry.is_overnight,
        )
        for entry in branch.weekly_schedule()
    ]


def branch_out(branch: Branch, locale: str, now: datetime) -> BranchOut:
    return BranchOut(
        id=branch.id,
        name=translate(branch.name, locale),
        address=translate(branch.address, locale),
        description=translate(branch.description, locale),
        is_active=branch.is_active,
        is_open_now=availability_service.is_open_at(branch.weekly_schedule(), now),
        created_at=branch.created_at,
    )
