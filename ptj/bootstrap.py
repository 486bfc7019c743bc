from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from ptj.auth import hash_password
from ptj.config import Settings, settings as default_settings
from ptj.database import utcnow
from ptj.logging_config import get_logger
from ptj.models import ApplicationStatus, ApplicationStatusLookup, Role, RoleName, User, UserRole

logger = get_logger("ptj.bootstrap")

ROLE_DESCRIPTIONS = {
    RoleName.ADMIN: "Platform administrator",
    RoleName.EMPLOYER: "Owner of an approved company",
    RoleName.STUDENT: "Job seeker",
}

STATUS_DESCRIPTIONS = {
    ApplicationStatus.PENDING: "Application submitted, waiting for review",
    ApplicationStatus.REVIEWING: "Employer is reviewing the application",
    ApplicationStatus.SHORTLISTED: "Candidate has been shortlisted",
    ApplicationStatus.INTERVIEWING: "Interview scheduled or in progress",
    ApplicationStatus.OFFERED: "Job offer extended to the candidate",
    ApplicationStatus.ACCEPTED: "Candidate has been hired",
    ApplicationStatus.REJECTED: "Application was not successful",
    ApplicationStatus.WITHDRAWN: "Applicant withdrew the application",
    ApplicationStatus.EXPIRED: "Application expired without a decision",
}


def wait_for_database(engine: Engine, attempts: int = default_settings.db_connect_attempts) -> None:
    @retry(
        retry=retry_if_exception_type(OperationalError),
        stop=stop_after_attempt(max(1, attempts)),
        wait=wait_exponential(min=1, max=8),
        reraise=True,
    )
    def _ping() -> None:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    _ping()


def seed_reference_data(db: Session, settings: Settings = default_settings) -> None:
    """Insert roles, application statuses and the default admin if missing."""
    roles = {role.name: role for role in db.query(Role).all()}
    for name in RoleName.ALL:
        if name not in roles:
            roles[name] = Role(name=name, description=ROLE_DESCRIPTIONS[name])
            db.add(roles[name])

    existing_statuses = {row.name for row in db.query(ApplicationStatusLookup).all()}
    for order, status in enumerate(ApplicationStatus, start=1):
        if status.value not in existing_statuses:
            db.add(
                ApplicationStatusLookup(
                    id=order,
                    name=status.value,
                    description=STATUS_DESCRIPTIONS[status],
                    display_order=order,
                )
            )
    db.flush()

    admin_email = settings.default_admin_email.strip().lower()
    if admin_email and db.query(User).execution_options(include_deleted=True).filter(User.email == admin_email).first() is None:
        admin = User(
            email=admin_email,
            password_hash=hash_password(settings.default_admin_password),
            full_name="Administrator",
            is_active=True,
            is_email_verified=True,
        )
        admin.user_roles = [UserRole(role=roles[RoleName.ADMIN], assigned_at=utcnow())]
        db.add(admin)
        logger.info("Default admin account %s created", admin_email)

    db.commit()
