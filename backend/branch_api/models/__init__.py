from .user import User, UserRole
from .branch import Branch
from .working_hour import BranchWorkingHour
from .otp_code import OtpCode

__all__ = [
    "User",
    "UserRole",
    "Branch",
    "BranchWorkingHour",
    "OtpCode",
]
