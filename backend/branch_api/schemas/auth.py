from pydantic import BaseModel, Field


class AdminLoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)


class SendOtpRequest(BaseModel):
    phone: str = Field(..., min_length=6, max_length=20, pattern=r"^\+?[0-9]+$")


class VerifyOtpRequest(SendOtpRequest):
    otp: str = Field(..., min_length=4, max_length=6, pattern=r"^[0-9]+$")
    name: str | None = Field(default=None, max_length=255)


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
