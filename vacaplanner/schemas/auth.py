from datetime import date, datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator, model_validator

from vacaplanner.models.user import UserRole
from vacaplanner.schemas.common import CamelModel


class RegisterRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=6)
    name: Optional[str] = Field(default=None, min_length=2)
    first_name: Optional[str] = Field(default=None, min_length=2)
    last_name: Optional[str] = Field(default=None, min_length=2)
    date_of_birth: Optional[date] = None

    @model_validator(mode="after")
    def require_display_name(self):
        if not self.name and not (self.first_name and self.last_name):
            raise ValueError("Indicare il nome oppure nome e cognome")
        return self

    @property
    def display_name(self) -> str:
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name}"
        return self.name


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)


class UserResponse(CamelModel):
    id: int
    email: str
    name: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    date_of_birth: Optional[date] = None
    role: UserRole
    avatar_url: Optional[str] = None
    job_title: Optional[str] = None
    department: Optional[str] = None
    bio: Optional[str] = None
    phone_number: Optional[str] = None
    vacation_days_total: int
    vacation_days_used: float
    personal_hours_total: int
    personal_hours_used: float
    created_at: Optional[datetime] = None


class UserSummary(CamelModel):
    id: int
    name: str
    email: str
    avatar_url: Optional[str] = None


class RegisterResponse(CamelModel):
    message: str
    user: UserResponse
    is_admin: bool


class Token(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class ProfileUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=2)
    job_title: Optional[str] = None
    department: Optional[str] = None
    bio: Optional[str] = None
    phone_number: Optional[str] = Field(default=None, max_length=50)
    avatar_url: Optional[str] = None
    vacation_days_total: Optional[int] = Field(default=None, ge=0)
    personal_hours_total: Optional[int] = Field(default=None, ge=0)

    @field_validator("avatar_url")
    @classmethod
    def validate_avatar_url(cls, value: Optional[str]) -> Optional[str]:
        if value and not value.startswith(("http://", "https://")):
            raise ValueError("URL avatar non valido")
        return value


class RoleUpdate(CamelModel):
    role: UserRole


class RoleUpdateResponse(CamelModel):
    success: bool
    role: UserRole


class BalanceResponse(CamelModel):
    user_id: int
    vacation_days_total: int
    vacation_days_used: float
    vacation_days_remaining: float
    personal_hours_total: int
    personal_hours_used: float
    personal_hours_remaining: float
