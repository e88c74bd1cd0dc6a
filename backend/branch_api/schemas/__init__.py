from .auth import Token, AdminLoginRequest, SendOtpRequest, VerifyOtpRequest
from .user import UserCreate, UserOut
from .branch import BranchCreate, BranchUpdate, BranchOut, BranchAvailabilityOut
from .working_hour import WorkingHourIn, WorkingHoursUpdate, OpenDayRequest, WorkingHourOut

__all__ = [
    "Token",
    "AdminLoginRequest",
    "SendOtpRequest",
    "VerifyOtpRequest",
    "UserCreate",
    "UserOut",
    "BranchCreate",
    "BranchUpdate",
    "BranchOut",
    "BranchAvailabilityOut",
    "WorkingHourIn",
    "WorkingHoursUpdate",
    "OpenDayRequest",
    "WorkingHourOut",
]
