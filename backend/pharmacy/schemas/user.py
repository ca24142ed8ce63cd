import re
from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from pharmacy.schemas.common import CamelModel, NameStr

PHONE_PATTERN = re.compile(r"^\d{10}$")


class RegisterRequest(CamelModel):
    full_name: NameStr
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)
    role: str = "Customer"
    address: Optional[str] = Field(default=None, max_length=255)
    phone_number: Optional[str] = Field(default=None, max_length=15)

    @field_validator("phone_number")
    @classmethod
    def phone_is_ten_digits(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return v
        if not PHONE_PATTERN.match(v.strip()):
            raise ValueError("Invalid phone number")
        return v.strip()


class RegisterResponse(CamelModel):
    message: str = "Registration successful"
    user_id: int


class LoginRequest(CamelModel):
    email: EmailStr
    password: str


class LoginResponse(CamelModel):
    message: str = "Login successful"
    user_id: int
    full_name: str
    email: str
    role: str
    access_token: str
    token_type: str = "bearer"


class UserCreate(CamelModel):
    full_name: NameStr
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)
    role: str


class UserUpdate(CamelModel):
    full_name: NameStr
    email: EmailStr
    role: str
    password: Optional[str] = Field(default=None, max_length=128)


class UserSummary(CamelModel):
    id: int
    full_name: str
    email: str
    role: str


class UserResponse(UserSummary):
    created_at: Optional[datetime] = None
    image_url: Optional[str] = None


class ImageUploadResponse(CamelModel):
    message: str = "Image uploaded successfully."
    image_url: str
