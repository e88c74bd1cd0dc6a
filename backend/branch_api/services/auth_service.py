import logging
from datetime import datetime, timezone

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models.user import User, UserRole
from ..schemas.auth import AdminLoginRequest, VerifyOtpRequest
from ..schemas.user import UserCreate
from ..core.security import verify_password, get_password_hash, token_payload
from . import otp_service

logger = logging.getLogger(__name__)


def _invalid_credentials() -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={"message": "Invalid credentials.", "errors": {"email": ["Invalid credentials."]}},
    )


def authenticate_admin(db: Session, credentials: AdminLoginRequest) -> dict:
    user = db.scalars(select(User).where(User.email == credentials.email)).first()
    if not user:
        raise _invalid_credentials()
    if not user.role.can_access_admin_panel():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied. Admin privileges required.")
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is deactivated. Please contact support.")
    if not verify_password(credentials.password, user.password_hash):
        raise _invalid_credentials()
    return token_payload(user)


def login_with_otp(db: Session, payload: VerifyOtpRequest) -> dict:
    otp_service.verify_otp(db, payload.phone, payload.otp)

    user = db.scalars(select(User).where(User.phone == payload.phone)).first()
    now = datetime.now(timezone.utc)
    if user is None:
        if not payload.name:
            raise HTTPException(
                status_code=422,
                detail={"message": "Name is required for new users.", "errors": {"name": ["Name is required for new users."]}},
            )
        user = User(
            name=payload.name,
            phone=payload.phone,
            role=UserRole.CUSTOMER,
            phone_verified_at=now,
            is_active=True,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info("Customer %s registered via OTP", user.id)
    elif user.phone_verified_at is None:
        user.phone_verified_at = now
        db.commit()
        db.refresh(user)
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is deactivated. Please contact support.")
    return token_payload(user)


def create_user(db: Session, data: UserCreate) -> User:
    if data.email:
        existing = db.scalars(select(User).where(User.email == data.email)).first()
        if existing:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already exists")
    if data.phone:
        existing = db.scalars(select(User).where(User.phone == data.phone)).first()
        if existing:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Phone already exists")
    user = User(
        name=data.name,
        email=data.email,
        phone=data.phone,
        password_hash=get_password_hash(data.password) if data.password else None,
        role=data.role,
        is_active=data.is_active,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("User %s created with role %s", user.id, user.role.value)
    return user
