from __future__ import annotations

from datetime import datetime, time
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator

from ptj.models.job_post import JobPostStatus


class JobShiftIn(BaseModel):
    day_of_week: int = Field(ge=0, le=6)
    start_time: time
    end_time: time
    notes: str | None = Field(default=None, max_length=500)

    @model_validator(mode="after")
    def _ends_after_start(self) -> "JobShiftIn":
        if self.end_time <= self.start_time:
            raise ValueError("Shift end time must be after start time")
        return self


class JobShiftOut(JobShiftIn):
    id: int

    class Config:
        from_attributes = True


class JobPostFields(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    requirements: str | None = None
    benefits: str | None = None
    salary_min: Decimal | None = Field(default=None, ge=0)
    salary_max: Decimal | None = Field(default=None, ge=0)
    salary_period: str | None = Field(default=None, max_length=20)
    location: str | None = Field(default=None, max_length=255)
    work_type: str | None = Field(default=None, max_length=50)
    category: str | None = Field(default=None, max_length=100)
    number_of_positions: int | None = Field(default=None, ge=1)
    application_deadline: datetime | None = None

    @model_validator(mode="after")
    def _salary_range(self) -> "JobPostFields":
        if self.salary_min is not None and self.salary_max is not None and self.salary_min > self.salary_max:
            raise ValueError("salary_min cannot exceed salary_max")
        return self


class JobPostCreate(JobPostFields):
    shifts: list[JobShiftIn] = Field(default_factory=list)
    required_skills: list[str] = Field(default_factory=list)


class JobPostUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1)
    requirements: str | None = None
    benefits: str | None = None
    salary_min: Decimal | None = Field(default=None, ge=0)
    salary_max: Decimal | None = Field(default=None, ge=0)
    salary_period: str | None = None
    location: str | None = None
    work_type: str | None = None
    category: str | None = None
    number_of_positions: int | None = Field(default=None, ge=1)
    application_deadline: datetime | None = None


class JobPostStatusUpdate(BaseModel):
    status: JobPostStatus


class JobPostOut(JobPostFields):
    id: int
    company_id: int
    company_name: str
    company_logo_url: str | None = None
    status: str
    view_count: int
    application_count: int
    is_featured: bool
    is_urgent: bool
    created_at: datetime | None = None
    shifts: list[JobShiftOut] = Field(default_factory=list)
    required_skills: list[str] = Field(default_factory=list)

    class Config:
        from_attributes = True


class JobSearchParams(BaseModel):
    search_term: str | None = None
    location: str | None = None
    category: str | None = None
    work_type: str | None = None
    salary_min: Decimal | None = Field(default=None, ge=0)
    sort_by: str | None = None
    sort_descending: bool = True
    page_number: int = Field(default=1, ge=1)
    page_size: int = Field(default=10, ge=1, le=100)
