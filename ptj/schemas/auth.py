from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, model_validator

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class RegisterRequest(BaseModel):
    email: str = Field(min_length=3, max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(min_length=6, max_length=256)
    confirm_password: str = Field(min_length=6, max_length=256)
    full_name: str | None = Field(default=None, max_length=255)
    phone_number: str | None = Field(default=None, max_length=30, pattern=r"^\+?[0-9 ()-]{6,30}$")

    @model_validator(mode="after")
    def _passwords_match(self) -> "RegisterRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class LoginRequest(BaseModel):
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=6, max_length=256)


class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: int
    email: str
    full_name: str | None = None
    roles: list[str]


class MeResponse(BaseModel):
    id: int
    email: str
    full_name: str | None = None
    phone_number: str | None = None
    avatar_url: str | None = None
    is_active: bool
    role_names: list[str]
    last_login_at: datetime | None = None

    class Config:
        from_attributes = True
