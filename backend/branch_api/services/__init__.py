from .availability_service import is_open_at, is_open_now
from .branch_service import (
    create_branch,
    update_branch,
    delete_branch,
    get_branch,
    list_active_branches,
    set_working_hours,
    open_day,
    close_day,
)
from .auth_service import authenticate_admin, login_with_otp, create_user
from .otp_service import send_otp, verify_otp

__all__ = [
    "is_open_at",
    "is_open_now",
    "create_branch",
    "update_branch",
    "delete_branch",
    "get_branch",
    "list_active_branches",
    "set_working_hours",
    "open_day",
    "close_day",
    "authenticate_admin",
    "login_with_otp",
    "create_user",
    "send_otp",
    "verify_otp",
]
