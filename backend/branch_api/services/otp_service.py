import logging
import secrets
from datetime import datetime, timedelta, timezone

from fastapi import HTTPException
from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from ..core.config import get_settings
from ..core.security import get_password_hash, verify_password
from ..models.otp_code import OtpCode

settings = get_settings()
logger = logging.getLogger(__name__)


def _otp_error(message: str) -> HTTPException:
    return HTTPException(status_code=422, detail={"message": message, "errors": {"otp": [message]}})


def generate_otp() -> str:
    return f"{secrets.randbelow(10000):04d}"


def send_otp(db: Session, phone: str, now: datetime | None = None) -> str:
    """Issue a fresh code for ``phone`` and return it.

    Earlier unverified codes for the phone are discarded. Only the hash is
    stored. Delivery over SMS is not wired up; the plain code is returned to
    the caller so a gateway can be plugged in at the route.
    """
    now = now or datetime.now(timezone.utc)
    db.execute(delete(OtpCode).where(OtpCode.phone == phone, OtpCode.verified_at.is_(None)))
    otp = settings.static_otp if settings.static_otp is not None else generate_otp()
    db.add(
        OtpCode(
            phone=phone,
            code=get_password_hash(otp),
            expires_at=now + timedelta(minutes=settings.otp_expire_minutes),
            attempts=0,
        )
    )
    db.commit()
    logger.info("OTP issued for phone ending %s", phone[-4:])
    return otp


def verify_otp(db: Session, phone: str, otp: str, now: datetime | None = None) -> OtpCode:
    now = now or datetime.now(timezone.utc)
    record = db.scalars(
        select(OtpCode)
        .where(OtpCode.phone == phone, OtpCode.verified_at.is_(None))
        .order_by(OtpCode.id.desc())
        .limit(1)
    ).first()
    if record is None:
        raise _otp_error("No OTP request found for this phone number.")
    if record.is_expired(now):
        raise _otp_error("OTP has expired. Please request a new one.")
    if record.has_exceeded_attempts(settings.otp_max_attempts):
        raise _otp_error("Maximum verification attempts exceeded. Please request a new OTP.")

    if settings.static_otp is not None:
        is_valid = otp == settings.static_otp
    else:
        is_valid = verify_password(otp, record.code)
    if not is_valid:
        # increment in SQL, not on the loaded row
        db.execute(
            update(OtpCode)
            .where(OtpCode.id == record.id)
            .values(attempts=OtpCode.attempts + 1)
            .execution_options(synchronize_session=False)
        )
        db.commit()
        logger.warning("Invalid OTP for phone ending %s (attempt %d)", phone[-4:], record.attempts)
        raise _otp_error("Invalid OTP code.")

    record.verified_at = now
    db.commit()
    return record
