from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ..api.deps import get_active_user
from ..core.config import get_settings
from ..core.db import get_db
from ..core.rate_limit import limiter
from ..core.responses import success
from ..core.security import token_payload
from ..schemas.auth import AdminLoginRequest, SendOtpRequest, VerifyOtpRequest, Token
from ..schemas.user import UserOut
from ..services import auth_service, otp_service

settings = get_settings()
router = APIRouter()


@router.post("/admin/login")
@limiter.limit(settings.auth_rate_limit)
def admin_login(request: Request, payload: AdminLoginRequest, db: Session = Depends(get_db)):
    return success(Token(**auth_service.authenticate_admin(db, payload)))


@router.post("/otp/send")
@limiter.limit(settings.auth_rate_limit)
def send_otp(request: Request, payload: SendOtpRequest, db: Session = Depends(get_db)):
    otp_service.send_otp(db, payload.phone)
    return success(message="OTP sent successfully.")


@router.post("/otp/verify")
@limiter.limit(settings.auth_rate_limit)
def verify_otp(request: Request, payload: VerifyOtpRequest, db: Session = Depends(get_db)):
    return success(Token(**auth_service.login_with_otp(db, payload)))


@router.get("/me")
def get_me(current_user=Depends(get_active_user)):
    return success(UserOut.model_validate(current_user))


@router.post("/refresh")
def refresh(current_user=Depends(get_active_user)):
    return success(Token(**token_payload(current_user)))
