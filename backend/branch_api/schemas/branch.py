from datetime import datetime
from typing import Annotated
from pydantic import AfterValidator, BaseModel, Field


def _clean_translations(value: dict[str, str]) -> dict[str, str]:
    cleaned = {locale.strip().lower(): text for locale, text in value.items() if text}
    if not cleaned:
        raise ValueError("at least one translation is required")
    return cleaned


# {"ar": "...", "en": "..."}
Translations = Annotated[dict[str, str], AfterValidator(_clean_translations)]


class BranchCreate(BaseModel):
    name: Translations = Field(..., description="Translations keyed by locale")
    address: Translations | None = None
    description: Translations | None = None
    is_active: bool = True


class BranchUpdate(BaseModel):
    name: Translations | None = None
    address: Translations | None = None
    description: Translations | None = None
    is_active: bool | None = None


class BranchOut(BaseModel):
    id: int
    name: str | None
    address: str | None
    description: str | None
    is_active: bool
    is_open_now: bool
    created_at: datetime | None = None


class BranchAvailabilityOut(BaseModel):
    branch_id: int
    at: datetime
    weekday: int
    weekday_name: str
    is_open: bool
