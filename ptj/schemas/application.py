from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class ApplicationCreate(BaseModel):
    job_post_id: int
    cover_letter: str | None = Field(default=None, max_length=2000)
    resume_url: str | None = Field(default=None, max_length=500)


class ApplicationStatusUpdate(BaseModel):
    status_id: int
    notes: str | None = Field(default=None, max_length=1000)
    row_version: int | None = None


class ApplicationOut(BaseModel):
    id: int
    job_post_id: int
    job_title: str
    profile_id: int
    applicant_user_id: int
    applicant_name: str
    status_id: int
    status_name: str
    cover_letter: str | None = None
    resume_url: str | None = None
    applied_at: datetime
    reviewed_by: int | None = None
    reviewed_at: datetime | None = None
    review_notes: str | None = None
    withdrawn_at: datetime | None = None
    row_version: int

    class Config:
        from_attributes = True


class ApplicationHistoryOut(BaseModel):
    id: int
    application_id: int
    from_status_id: int
    from_status_name: str
    to_status_id: int
    to_status_name: str
    changed_by: int | None = None
    changed_at: datetime
    notes: str | None = None

    class Config:
        from_attributes = True


class ApplicationStatusOut(BaseModel):
    id: int
    name: str
    description: str | None = None
    display_order: int

    class Config:
        from_attributes = True


class ApplicationStatsOut(BaseModel):
    total: int = 0
    by_status: dict[str, int] = Field(default_factory=dict)
