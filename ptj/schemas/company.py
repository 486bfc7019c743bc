from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class CompanyAttributes(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=2000)
    address: str | None = Field(default=None, max_length=500)
    website: str | None = Field(default=None, max_length=255)
    tax_code: str | None = Field(default=None, max_length=50)
    industry: str | None = Field(default=None, max_length=100)
    employee_count: int | None = Field(default=None, ge=0)
    founded_year: int | None = Field(default=None, ge=1800, le=2100)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value


class CompanyOut(BaseModel):
    id: int
    owner_id: int
    name: str
    description: str | None = None
    address: str | None = None
    website: str | None = None
    logo_url: str | None = None
    tax_code: str | None = None
    industry: str | None = None
    employee_count: int | None = None
    founded_year: int | None = None
    is_verified: bool
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class CompanyRequestOut(BaseModel):
    id: int
    requester_id: int
    requester_email: str | None = None
    requester_name: str | None = None
    company_name: str
    tax_code: str | None = None
    address: str | None = None
    website: str | None = None
    description: str | None = None
    industry: str | None = None
    employee_count: int | None = None
    founded_year: int | None = None
    status: str
    rejection_reason: str | None = None
    reviewed_by: int | None = None
    reviewer_name: str | None = None
    reviewed_at: datetime | None = None
    approved_company_id: int | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class ApproveCompanyRequest(BaseModel):
    request_id: int


class RejectCompanyRequest(BaseModel):
    request_id: int
    rejection_reason: str = Field(min_length=1, max_length=1000)
