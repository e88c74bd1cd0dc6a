from datetime import datetime
from pydantic import BaseModel, ConfigDict
from ..models.user import UserRole


class UserCreate(BaseModel):
    name: str
    email: str | None = None
    phone: str | None = None
    password: str | None = None
    role: UserRole = UserRole.CUSTOMER
    is_active: bool = True


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str | None = None
    phone: str | None = None
    role: UserRole
    is_active: bool
    phone_verified_at: datetime | None = None
    created_at: datetime | None = None
