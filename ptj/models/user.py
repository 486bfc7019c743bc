from __future__ import annotations

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from ptj.database import Base, SoftDeleteMixin, TimestampMixin, utcnow


class RoleName:
    ADMIN = "ADMIN"
    EMPLOYER = "EMPLOYER"
    STUDENT = "STUDENT"

    ALL = (ADMIN, EMPLOYER, STUDENT)


class User(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(512), nullable=False)
    full_name = Column(String(255))
    phone_number = Column(String(30))
    avatar_url = Column(String(500))
    is_email_verified = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    last_login_at = Column(DateTime)

    user_roles = relationship("UserRole", back_populates="user", cascade="all, delete-orphan", lazy="selectin")

    @property
    def role_names(self) -> list[str]:
        return sorted(user_role.role.name for user_role in self.user_roles if user_role.role is not None)

    @property
    def display_name(self) -> str:
        return self.full_name or self.email


class Role(TimestampMixin, Base):
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), unique=True, nullable=False)
    description = Column(String(255))


class UserRole(TimestampMixin, Base):
    __tablename__ = "user_roles"
    __table_args__ = (UniqueConstraint("user_id", "role_id", name="uq_user_role"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    role_id = Column(Integer, ForeignKey("roles.id", ondelete="CASCADE"), nullable=False)
    assigned_at = Column(DateTime, default=utcnow, nullable=False)

    user = relationship("User", back_populates="user_roles")
    role = relationship("Role", lazy="joined")
