# ebee/schemas/user.py
from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from ebee.db.models import UserType
from ebee.schemas.common import CamelModel


# Auth payloads keep every field optional so missing ones can be reported together
class SignupRequest(CamelModel):
    email: Optional[str] = None
    name: Optional[str] = None
    phone_number: Optional[str] = None
    password: Optional[str] = None


class SignupOut(CamelModel):
    user_id: int
    email: str


class LoginRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class ForgotPasswordRequest(CamelModel):
    email: str


class ChangePasswordRequest(CamelModel):
    password: Optional[str] = None


class UserOut(CamelModel):
    id: int
    name: str
    email: EmailStr
    phone_number: str
    user_type: UserType
    is_approved: bool
    created_at: Optional[datetime] = None


class TokenOut(CamelModel):
    token: str
    token_type: str = "bearer"
    user: UserOut


class UserUpdate(CamelModel):
    email: Optional[EmailStr] = None
    name: Optional[str] = Field(None, min_length=1)
    phone_number: Optional[str] = None
    password: Optional[str] = Field(None, min_length=1)
    is_approved: Optional[bool] = None
    user_type: Optional[UserType] = None


class UserApprove(CamelModel):
    is_approved: bool = True
