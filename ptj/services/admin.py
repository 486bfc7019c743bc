"""Back-office operations. Callers must already hold the ADMIN role."""

from __future__ import annotations

from sqlalchemy import or_

from ptj.auth import Actor
from ptj.errors import NotFoundError, PermissionDeniedError, ValidationError
from ptj.logging_config import get_logger
from ptj.models import (
    CompanyRegistrationRequest,
    CompanyRequestStatus,
    JobPost,
    JobPostStatus,
    Role,
    User,
    UserRole,
)
from ptj.repository import PaginatedList, UnitOfWork
from ptj.schemas.admin import DashboardStats, JobStats, UserStats
from ptj.services.job_posts import JobPostService

logger = get_logger("ptj.admin")


class AdminService:
    def __init__(self, uow: UnitOfWork, admin: Actor) -> None:
        if not admin.is_admin:
            raise PermissionDeniedError("Administrator role required")
        self.uow = uow
        self.admin = admin

    def search_users(
        self,
        page_number: int,
        page_size: int,
        search: str | None = None,
        role: str | None = None,
        is_active: bool | None = None,
    ) -> PaginatedList[User]:
        query = self.uow.users.query()
        if search and search.strip():
            term = f"%{search.strip()}%"
            query = query.filter(or_(User.email.ilike(term), User.full_name.ilike(term)))
        if role:
            query = query.filter(User.user_roles.any(UserRole.role.has(Role.name == role.upper())))
        if is_active is not None:
            query = query.filter(User.is_active.is_(is_active))
        query = query.order_by(User.created_at.desc(), User.id.desc())
        return self.uow.users.paginate(query, page_number, page_size)

    def lock_user(self, user_id: int) -> User:
        if user_id == self.admin.user_id:
            raise ValidationError("You cannot lock your own account")
        return self._set_active(user_id, False)

    def unlock_user(self, user_id: int) -> User:
        return self._set_active(user_id, True)

    def moderate_job(self, job_post_id: int, status: JobPostStatus) -> JobPost:
        job = self.uow.job_posts.get(job_post_id)
        if job is None:
            raise NotFoundError("Job post not found")
        previous = job.status
        job.status = status.value
        with self.uow.transaction():
            self.uow.job_posts.update(job)

        logger.info("Admin %s moved job post %s %s -> %s", self.admin.user_id, job.id, previous, job.status)
        return job

    def delete_job(self, job_post_id: int) -> None:
        job = self.uow.job_posts.get(job_post_id)
        if job is None:
            raise NotFoundError("Job post not found")
        JobPostService(self.uow).remove(job)
        logger.info("Admin %s deleted job post %s", self.admin.user_id, job.id)

    def dashboard(self) -> DashboardStats:
        jobs = self.uow.job_posts
        total_users = self.uow.users.count()
        active_users = self.uow.users.count(User.is_active.is_(True))
        return DashboardStats(
            users=UserStats(total=total_users, active=active_users, locked=total_users - active_users),
            jobs=JobStats(
                total=jobs.count(),
                active=jobs.count(JobPost.status == JobPostStatus.ACTIVE.value),
                pending=jobs.count(JobPost.status == JobPostStatus.PENDING.value),
                closed=jobs.count(JobPost.status == JobPostStatus.CLOSED.value),
                draft=jobs.count(JobPost.status == JobPostStatus.DRAFT.value),
            ),
            companies=self.uow.companies.count(),
            pending_company_requests=self.uow.company_requests.count(
                CompanyRegistrationRequest.status == CompanyRequestStatus.PENDING.value
            ),
            applications=self.uow.applications.count(),
        )

    def _set_active(self, user_id: int, active: bool) -> User:
        user = self.uow.users.get(user_id)
        if user is None:
            raise NotFoundError("User not found")
        user.is_active = active
        with self.uow.transaction():
            self.uow.users.update(user)

        logger.info("Admin %s %s user %s", self.admin.user_id, "unlocked" if active else "locked", user.id)
        return user
