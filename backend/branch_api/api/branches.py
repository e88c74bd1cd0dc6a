from datetime import datetime

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from ..api.deps import Clock, get_active_admin, get_clock, get_locale
from ..core.db import get_db
from ..core.responses import success
from ..domain.schedule import DayOfWeek
from ..schemas.branch import BranchAvailabilityOut, BranchCreate, BranchUpdate
from ..schemas.working_hour import OpenDayRequest, WorkingHoursUpdate
from ..services import availability_service, branch_service

router = APIRouter()


@router.get("")
def list_branches(
    page: int = Query(default=1, ge=1),
    per_page: int | None = Query(default=None),
    db: Session = Depends(get_db),
    locale: str = Depends(get_locale),
    clock: Clock = Depends(get_clock),
):
    branches, meta = branch_service.list_active_branches(db, page=page, per_page=per_page)
    now = clock()
    return success([branch_service.branch_out(b, locale, now) for b in branches], meta=meta)


@router.get("/{branch_id}")
def get_branch(
    branch_id: int,
    db: Session = Depends(get_db),
    locale: str = Depends(get_locale),
    clock: Clock = Depends(get_clock),
):
    branch = branch_service.get_branch(db, branch_id)
    return success(branch_service.branch_out(branch, locale, clock()))


@router.get("/{branch_id}/availability")
def get_availability(
    branch_id: int,
    at: datetime | None = Query(default=None, description="Instant to evaluate; defaults to now"),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    branch = branch_service.get_branch(db, branch_id)
    at = at or clock()
    weekday = DayOfWeek.of(at)
    return success(
        BranchAvailabilityOut(
            branch_id=branch.id,
            at=at,
            weekday=int(weekday),
            weekday_name=weekday.label,
            is_open=availability_service.is_open_at(branch.weekly_schedule(), at),
        )
    )


@router.get("/{branch_id}/working-hours")
def get_working_hours(branch_id: int, db: Session = Depends(get_db)):
    branch = branch_service.get_branch(db, branch_id)
    return success(branch_service.working_hours_out(branch))


@router.post("", status_code=201, dependencies=[Depends(get_active_admin)])
def create_branch(
    payload: BranchCreate,
    db: Session = Depends(get_db),
    locale: str = Depends(get_locale),
    clock: Clock = Depends(get_clock),
):
    branch = branch_service.create_branch(db, payload)
    return success(branch_service.branch_out(branch, locale, clock()), message="Branch created.")


@router.put("/{branch_id}", dependencies=[Depends(get_active_admin)])
def update_branch(
    branch_id: int,
    payload: BranchUpdate,
    db: Session = Depends(get_db),
    locale: str = Depends(get_locale),
    clock: Clock = Depends(get_clock),
):
    branch = branch_service.update_branch(db, branch_id, payload)
    return success(branch_service.branch_out(branch, locale, clock()))


@router.post("/{branch_id}/activate", dependencies=[Depends(get_active_admin)])
def activate_branch(
    branch_id: int,
    db: Session = Depends(get_db),
    locale: str = Depends(get_locale),
    clock: Clock = Depends(get_clock),
):
    branch = branch_service.set_branch_active(db, branch_id, True)
    return success(branch_service.branch_out(branch, locale, clock()))


@router.post("/{branch_id}/deactivate", dependencies=[Depends(get_active_admin)])
def deactivate_branch(
    branch_id: int,
    db: Session = Depends(get_db),
    locale: str = Depends(get_locale),
    clock: Clock = Depends(get_clock),
):
    branch = branch_service.set_branch_active(db, branch_id, False)
    return success(branch_service.branch_out(branch, locale, clock()))


@router.delete("/{branch_id}", dependencies=[Depends(get_active_admin)])
def delete_branch(branch_id: int, db: Session = Depends(get_db)):
    branch_service.delete_branch(db, branch_id)
    return success({"deleted": True, "id": branch_id})


@router.put("/{branch_id}/working-hours", dependencies=[Depends(get_active_admin)])
def set_working_hours(branch_id: int, payload: WorkingHoursUpdate, db: Session = Depends(get_db)):
    """Replace the listed weekdays of a branch.

    The payload is validated before the branch is loaded, so an invalid body
    sent for a missing branch gets 422 rather than 404.
    """
    branch = branch_service.set_working_hours(db, branch_id, payload.data)
    return success(branch_service.working_hours_out(branch), message="Working hours updated.")


@router.put("/{branch_id}/working-hours/{day}/open", dependencies=[Depends(get_active_admin)])
def open_day(
    branch_id: int,
    payload: OpenDayRequest,
    day: int = Path(..., ge=0, le=6),
    db: Session = Depends(get_db),
):
    branch = branch_service.open_day(db, branch_id, DayOfWeek(day), payload.opens_at, payload.closes_at)
    return success(branch_service.working_hours_out(branch))


@router.put("/{branch_id}/working-hours/{day}/close", dependencies=[Depends(get_active_admin)])
def close_day(branch_id: int, day: int = Path(..., ge=0, le=6), db: Session = Depends(get_db)):
    branch = branch_service.close_day(db, branch_id, DayOfWeek(day))
    return success(branch_service.working_hours_out(branch))
