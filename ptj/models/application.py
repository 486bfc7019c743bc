from __future__ import annotations

from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import relationship

from ptj.database import Base, SoftDeleteMixin, TimestampMixin, utcnow


class ApplicationStatus(str, Enum):
    PENDING = "Pending"
    REVIEWING = "Reviewing"
    SHORTLISTED = "Shortlisted"
    INTERVIEWING = "Interviewing"
    OFFERED = "Offered"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"
    WITHDRAWN = "Withdrawn"
    EXPIRED = "Expired"


class ApplicationStatusLookup(TimestampMixin, Base):
    __tablename__ = "application_statuses"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), unique=True, nullable=False)
    description = Column(String(255))
    display_order = Column(Integer, default=0, nullable=False)


class Application(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "applications"
    __table_args__ = (
        Index(
            "uq_applications_active_pair",
            "job_post_id",
            "profile_id",
            unique=True,
            sqlite_where=text("withdrawn_at IS NULL AND deleted_at IS NULL"),
            postgresql_where=text("withdrawn_at IS NULL AND deleted_at IS NULL"),
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    job_post_id = Column(Integer, ForeignKey("job_posts.id", ondelete="CASCADE"), nullable=False, index=True)
    profile_id = Column(Integer, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    status_id = Column(Integer, ForeignKey("application_statuses.id", ondelete="RESTRICT"), nullable=False)
    cover_letter = Column(String(2000))
    resume_url = Column(String(500))
    applied_at = Column(DateTime, default=utcnow, nullable=False)
    reviewed_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"))
    reviewed_at = Column(DateTime)
    review_notes = Column(String(1000))
    withdrawn_at = Column(DateTime)
    row_version = Column(Integer, nullable=False)

    job_post = relationship("JobPost", lazy="joined")
    profile = relationship("Profile", lazy="joined")
    status = relationship("ApplicationStatusLookup", lazy="joined")
    history = relationship(
        "ApplicationHistory",
        back_populates="application",
        cascade="all, delete-orphan",
        order_by="ApplicationHistory.id",
    )

    __mapper_args__ = {"version_id_col": row_version}

    @property
    def status_name(self) -> str:
        return self.status.name if self.status else "Unknown"

    @property
    def job_title(self) -> str:
        return self.job_post.title if self.job_post else "Unknown"

    @property
    def applicant_user_id(self) -> int:
        return self.profile.user_id if self.profile else 0

    @property
    def applicant_name(self) -> str:
        return (self.profile.full_name or "Unknown") if self.profile else "Unknown"


class ApplicationHistory(Base):
    """One row per status transition. Never updated or deleted."""

    __tablename__ = "application_histories"

    id = Column(Integer, primary_key=True, index=True)
    application_id = Column(Integer, ForeignKey("applications.id", ondelete="CASCADE"), nullable=False, index=True)
    from_status_id = Column(Integer, ForeignKey("application_statuses.id"), nullable=False)
    to_status_id = Column(Integer, ForeignKey("application_statuses.id"), nullable=False)
    changed_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"))
    changed_at = Column(DateTime, default=utcnow, nullable=False)
    notes = Column(Text)

    application = relationship("Application", back_populates="history")
    from_status = relationship("ApplicationStatusLookup", foreign_keys=[from_status_id], lazy="joined")
    to_status = relationship("ApplicationStatusLookup", foreign_keys=[to_status_id], lazy="joined")

    @property
    def from_status_name(self) -> str:
        return self.from_status.name if self.from_status else "Unknown"

    @property
    def to_status_name(self) -> str:
        return self.to_status.name if self.to_status else "Unknown"
