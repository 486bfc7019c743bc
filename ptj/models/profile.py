from __future__ import annotations

from sqlalchemy import Boolean, Column, Date, ForeignKey, Index, Integer, Numeric, String, Text, text
from sqlalchemy.orm import relationship

from ptj.database import Base, SoftDeleteMixin, TimestampMixin


class Profile(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "profiles"
    __table_args__ = (
        Index(
            "uq_profiles_user_active",
            "user_id",
            unique=True,
            sqlite_where=text("deleted_at IS NULL"),
            postgresql_where=text("deleted_at IS NULL"),
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    first_name = Column(String(100))
    last_name = Column(String(100))
    date_of_birth = Column(Date)
    gender = Column(String(20))
    address = Column(String(500))
    city = Column(String(100))
    district = Column(String(100))
    student_id = Column(String(50))
    university = Column(String(255))
    major = Column(String(255))
    gpa = Column(Numeric(3, 2))
    year_of_study = Column(Integer)
    expected_graduation_date = Column(Date)
    resume_url = Column(String(500))
    bio = Column(Text)
    linkedin_url = Column(String(500))
    github_url = Column(String(500))

    user = relationship("User")
    skills = relationship("ProfileSkill", cascade="all, delete-orphan", lazy="selectin")
    experiences = relationship("ProfileExperience", cascade="all, delete-orphan", lazy="selectin")
    educations = relationship("ProfileEducation", cascade="all, delete-orphan", lazy="selectin")
    certificates = relationship("ProfileCertificate", cascade="all, delete-orphan", lazy="selectin")

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


class ProfileSkill(Base):
    __tablename__ = "profile_skills"

    id = Column(Integer, primary_key=True, index=True)
    profile_id = Column(Integer, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    skill_name = Column(String(100), nullable=False)
    proficiency_level = Column(Integer)
    years_of_experience = Column(Integer)


class ProfileExperience(Base):
    __tablename__ = "profile_experiences"

    id = Column(Integer, primary_key=True, index=True)
    profile_id = Column(Integer, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    company_name = Column(String(255), nullable=False)
    position = Column(String(255), nullable=False)
    description = Column(Text)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date)
    is_currently_working = Column(Boolean, default=False, nullable=False)


class ProfileEducation(Base):
    __tablename__ = "profile_educations"

    id = Column(Integer, primary_key=True, index=True)
    profile_id = Column(Integer, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    institution_name = Column(String(255), nullable=False)
    degree = Column(String(255), nullable=False)
    field_of_study = Column(String(255))
    start_date = Column(Date, nullable=False)
    end_date = Column(Date)
    gpa = Column(Numeric(3, 2))
    description = Column(Text)


class ProfileCertificate(Base):
    __tablename__ = "profile_certificates"

    id = Column(Integer, primary_key=True, index=True)
    profile_id = Column(Integer, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    issuing_organization = Column(String(255))
    issue_date = Column(Date)
    expiry_date = Column(Date)
    credential_id = Column(String(255))
    credential_url = Column(String(500))
