from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class ProfileSkillIn(BaseModel):
    skill_name: str = Field(min_length=1, max_length=100)
    proficiency_level: int | None = Field(default=None, ge=1, le=5)
    years_of_experience: int | None = Field(default=None, ge=0)


class ProfileSkillOut(ProfileSkillIn):
    id: int

    class Config:
        from_attributes = True


class ProfileExperienceIn(BaseModel):
    company_name: str = Field(min_length=1, max_length=255)
    position: str = Field(min_length=1, max_length=255)
    description: str | None = None
    start_date: date
    end_date: date | None = None
    is_currently_working: bool = False


class ProfileExperienceOut(ProfileExperienceIn):
    id: int

    class Config:
        from_attributes = True


class ProfileEducationIn(BaseModel):
    institution_name: str = Field(min_length=1, max_length=255)
    degree: str = Field(min_length=1, max_length=255)
    field_of_study: str | None = None
    start_date: date
    end_date: date | None = None
    gpa: Decimal | None = Field(default=None, ge=0, le=10)
    description: str | None = None


class ProfileEducationOut(ProfileEducationIn):
    id: int

    class Config:
        from_attributes = True


class ProfileCertificateIn(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    issuing_organization: str | None = None
    issue_date: date | None = None
    expiry_date: date | None = None
    credential_id: str | None = None
    credential_url: str | None = None


class ProfileCertificateOut(ProfileCertificateIn):
    id: int

    class Config:
        from_attributes = True


class ProfileFields(BaseModel):
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    date_of_birth: date | None = None
    gender: str | None = Field(default=None, max_length=20)
    address: str | None = None
    city: str | None = None
    district: str | None = None
    student_id: str | None = None
    university: str | None = None
    major: str | None = None
    gpa: Decimal | None = Field(default=None, ge=0, le=10)
    year_of_study: int | None = Field(default=None, ge=1, le=10)
    expected_graduation_date: date | None = None
    resume_url: str | None = None
    bio: str | None = None
    linkedin_url: str | None = None
    github_url: str | None = None


class ProfileUpsert(ProfileFields):
    skills: list[ProfileSkillIn] = Field(default_factory=list)
    experiences: list[ProfileExperienceIn] = Field(default_factory=list)
    educations: list[ProfileEducationIn] = Field(default_factory=list)
    certificates: list[ProfileCertificateIn] = Field(default_factory=list)


class ProfileOut(ProfileFields):
    id: int
    user_id: int
    full_name: str
    skills: list[ProfileSkillOut] = Field(default_factory=list)
    experiences: list[ProfileExperienceOut] = Field(default_factory=list)
    educations: list[ProfileEducationOut] = Field(default_factory=list)
    certificates: list[ProfileCertificateOut] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True
