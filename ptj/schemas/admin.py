from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class AdminUserOut(BaseModel):
    id: int
    email: str
    full_name: str | None = None
    phone_number: str | None = None
    avatar_url: str | None = None
    is_active: bool
    is_email_verified: bool
    role_names: list[str]
    created_at: datetime | None = None
    last_login_at: datetime | None = None

    class Config:
        from_attributes = True


class UserStats(BaseModel):
    total: int
    active: int
    locked: int


class JobStats(BaseModel):
    total: int
    active: int
    pending: int
    closed: int
    draft: int


class DashboardStats(BaseModel):
    users: UserStats
    jobs: JobStats
    companies: int
    pending_company_requests: int
    applications: int
