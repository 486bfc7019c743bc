from __future__ import annotations

from enum import Enum

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, Numeric, String, Text, Time
from sqlalchemy.orm import relationship

from ptj.database import Base, SoftDeleteMixin, TimestampMixin, utcnow


class JobPostStatus(str, Enum):
    DRAFT = "Draft"
    ACTIVE = "Active"
    CLOSED = "Closed"
    EXPIRED = "Expired"
    ARCHIVED = "Archived"
    PENDING = "Pending"
    REJECTED = "Rejected"


class JobPost(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "job_posts"
    __table_args__ = (
        Index("idx_job_posts_status_created", "status", "created_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    created_by_user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"))
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    requirements = Column(Text)
    benefits = Column(Text)
    salary_min = Column(Numeric(12, 2))
    salary_max = Column(Numeric(12, 2))
    salary_period = Column(String(20))
    location = Column(String(255))
    work_type = Column(String(50))
    category = Column(String(100))
    number_of_positions = Column(Integer)
    application_deadline = Column(DateTime)
    status = Column(String(20), default=JobPostStatus.DRAFT.value, nullable=False)
    view_count = Column(Integer, default=0, nullable=False)
    application_count = Column(Integer, default=0, nullable=False)
    is_featured = Column(Boolean, default=False, nullable=False)
    is_urgent = Column(Boolean, default=False, nullable=False)

    company = relationship("Company", lazy="joined")
    shifts = relationship("JobShift", cascade="all, delete-orphan", lazy="selectin", order_by="JobShift.day_of_week")
    skills = relationship("JobPostSkill", cascade="all, delete-orphan", lazy="selectin")

    @property
    def company_name(self) -> str:
        return self.company.name if self.company else "Unknown"

    @property
    def company_logo_url(self) -> str | None:
        return self.company.logo_url if self.company else None

    @property
    def required_skills(self) -> list[str]:
        return [skill.skill_name for skill in self.skills]

    def is_open_for_applications(self, now=None) -> bool:
        if self.status != JobPostStatus.ACTIVE.value:
            return False
        if self.application_deadline is None:
            return True
        return self.application_deadline >= (now or utcnow())


class JobShift(Base):
    __tablename__ = "job_shifts"

    id = Column(Integer, primary_key=True, index=True)
    job_post_id = Column(Integer, ForeignKey("job_posts.id", ondelete="CASCADE"), nullable=False, index=True)
    # 0 = Monday
    day_of_week = Column(Integer, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    notes = Column(String(500))


class JobPostSkill(Base):
    __tablename__ = "job_post_skills"

    id = Column(Integer, primary_key=True, index=True)
    job_post_id = Column(Integer, ForeignKey("job_posts.id", ondelete="CASCADE"), nullable=False, index=True)
    skill_name = Column(String(100), nullable=False)
    required_level = Column(Integer)
    is_required = Column(Boolean, default=True, nullable=False)
