from __future__ import annotations

from enum import Enum

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import relationship

from ptj.database import Base, SoftDeleteMixin, TimestampMixin


class CompanyRequestStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class Company(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "companies"
    __table_args__ = (
        Index(
            "uq_companies_owner_active",
            "owner_id",
            unique=True,
            sqlite_where=text("deleted_at IS NULL"),
            postgresql_where=text("deleted_at IS NULL"),
        ),
        Index(
            "uq_companies_tax_code_active",
            "tax_code",
            unique=True,
            sqlite_where=text("tax_code IS NOT NULL AND deleted_at IS NULL"),
            postgresql_where=text("tax_code IS NOT NULL AND deleted_at IS NULL"),
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    address = Column(String(500))
    website = Column(String(255))
    logo_url = Column(String(500))
    tax_code = Column(String(50))
    industry = Column(String(100))
    employee_count = Column(Integer)
    founded_year = Column(Integer)
    is_verified = Column(Boolean, default=False, nullable=False)

    owner = relationship("User")


class CompanyRegistrationRequest(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "company_registration_requests"

    id = Column(Integer, primary_key=True, index=True)
    requester_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    company_name = Column(String(255), nullable=False)
    tax_code = Column(String(50))
    address = Column(String(500))
    website = Column(String(255))
    description = Column(Text)
    industry = Column(String(100))
    employee_count = Column(Integer)
    founded_year = Column(Integer)
    status = Column(String(20), default=CompanyRequestStatus.PENDING.value, nullable=False, index=True)
    rejection_reason = Column(String(1000))
    reviewed_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"))
    reviewed_at = Column(DateTime)
    approved_company_id = Column(Integer, ForeignKey("companies.id", ondelete="SET NULL"))
    row_version = Column(Integer, nullable=False)

    requester = relationship("User", foreign_keys=[requester_id])
    reviewer = relationship("User", foreign_keys=[reviewed_by])

    __mapper_args__ = {"version_id_col": row_version}

    @property
    def is_pending(self) -> bool:
        return self.status == CompanyRequestStatus.PENDING.value

    @property
    def requester_email(self) -> str | None:
        return self.requester.email if self.requester else None

    @property
    def requester_name(self) -> str | None:
        return self.requester.display_name if self.requester else None

    @property
    def reviewer_name(self) -> str | None:
        return self.reviewer.display_name if self.reviewer else None
