from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

# bcrypt only hashes the first 72 bytes and refuses longer input.
MAX_PASSWORD_BYTES = 72


class FacultyCreate(BaseModel):
    f_name: str = Field(..., min_length=1, max_length=100)
    l_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None
    role: Optional[str] = Field(None, max_length=50)
    password: Optional[str] = Field(None, min_length=8)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class FacultyResponse(BaseModel):
    """Never exposes the password hash."""

    id: int
    f_name: str
    l_name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    role: Optional[str] = None
    has_password: bool
    created_at: datetime

    class Config:
        from_attributes = True
