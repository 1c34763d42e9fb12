from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List
from datetime import datetime


class UserRegister(BaseModel):
    name: str = Field(..., min_length=2)
    email: EmailStr
    phone: str = Field(..., pattern=r'^\d{10}$', description="10-digit phone number")
    roll_no: int
    # Range is checked by the endpoint so the error names the allowed years
    batch: int
    branch: str = Field(..., min_length=1)
    password: str = Field(..., min_length=8)


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class RefreshRequest(BaseModel):
    refresh_token: str


class EmailCheckRequest(BaseModel):
    email: EmailStr


class EmailCheckResponse(BaseModel):
    available: bool


class PasswordChangeRequest(BaseModel):
    email: EmailStr
    old_password: str
    new_password: str = Field(..., min_length=8)


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class Token(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class SocialLinks(BaseModel):
    linkedin: Optional[str] = None
    facebook: Optional[str] = None


class UserResponse(BaseModel):
    """User as returned by the API, never includes the password hash"""
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    roll_no: Optional[int] = None
    batch: Optional[int] = None
    branch: Optional[str] = None
    role: str
    is_verified: bool
    biography: Optional[str] = None
    current_working_place: Optional[str] = None
    address: Optional[str] = None
    designation: Optional[str] = None
    achievements: List[str] = []
    social_links: SocialLinks = SocialLinks()
    profile_photo: Optional[str] = None
    created_at: datetime

    @field_validator('achievements', mode='before')
    @classmethod
    def default_achievements(cls, value):
        return value or []

    @field_validator('role', mode='before')
    @classmethod
    def role_value(cls, value):
        return getattr(value, "value", value)

    class Config:
        from_attributes = True


class LoginResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: UserResponse


class UserMessageResponse(BaseModel):
    message: str
    user: UserResponse


class MessageResponse(BaseModel):
    message: str
