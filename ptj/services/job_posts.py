"""Job post catalogue: browsing, search and the employer's own postings."""

from __future__ import annotations

from sqlalchemy import or_

from ptj.auth import Actor
from ptj.database import utcnow
from ptj.errors import NotFoundError, PermissionDeniedError, ValidationError
from ptj.logging_config import get_logger
from ptj.models import Application, Company, JobPost, JobPostSkill, JobPostStatus, JobShift
from ptj.repository import PaginatedList, UnitOfWork
from ptj.schemas.job_post import JobPostCreate, JobPostUpdate, JobSearchParams
from ptj.services.application_workflow import can_manage_job

logger = get_logger("ptj.jobs")

SORT_FIELDS = {
    "created_at": JobPost.created_at,
    "salary": JobPost.salary_max,
    "salary_min": JobPost.salary_min,
    "deadline": JobPost.application_deadline,
    "title": JobPost.title,
    "views": JobPost.view_count,
}


class JobPostService:
    def __init__(self, uow: UnitOfWork) -> None:
        self.uow = uow

    def get(self, job_post_id: int, count_view: bool = True) -> JobPost:
        job = self.uow.job_posts.get(job_post_id)
        if job is None:
            raise NotFoundError("Job post not found")
        if count_view:
            job.view_count = (job.view_count or 0) + 1
            with self.uow.transaction():
                self.uow.job_posts.update(job)
        return job

    def list_active(self, page_number: int, page_size: int) -> PaginatedList[JobPost]:
        query = (
            self.uow.job_posts.query()
            .filter(JobPost.status == JobPostStatus.ACTIVE.value)
            .order_by(JobPost.is_featured.desc(), JobPost.created_at.desc(), JobPost.id.desc())
        )
        return self.uow.job_posts.paginate(query, page_number, page_size)

    def search(self, params: JobSearchParams) -> PaginatedList[JobPost]:
        query = self.uow.job_posts.query().filter(JobPost.status == JobPostStatus.ACTIVE.value)

        if params.search_term and params.search_term.strip():
            term = f"%{params.search_term.strip()}%"
            query = query.filter(
                or_(
                    JobPost.title.ilike(term),
                    JobPost.description.ilike(term),
                    JobPost.requirements.ilike(term),
                )
            )
        if params.location:
            query = query.filter(JobPost.location.ilike(f"%{params.location.strip()}%"))
        if params.category:
            query = query.filter(JobPost.category == params.category)
        if params.work_type:
            query = query.filter(JobPost.work_type == params.work_type)
        if params.salary_min is not None:
            query = query.filter(
                or_(JobPost.salary_max >= params.salary_min, JobPost.salary_min >= params.salary_min)
            )

        sort_column = SORT_FIELDS.get((params.sort_by or "created_at").lower())
        if sort_column is None:
            raise ValidationError(f"Unsupported sort field: {params.sort_by}")
        ordering = sort_column.desc() if params.sort_descending else sort_column.asc()
        query = query.order_by(ordering, JobPost.id.desc())

        return self.uow.job_posts.paginate(query, params.page_number, params.page_size)

    def list_for_company(self, company_id: int, page_number: int, page_size: int) -> PaginatedList[JobPost]:
        if self.uow.companies.get(company_id) is None:
            raise NotFoundError("Company not found")
        query = (
            self.uow.job_posts.query()
            .filter(JobPost.company_id == company_id)
            .order_by(JobPost.created_at.desc(), JobPost.id.desc())
        )
        return self.uow.job_posts.paginate(query, page_number, page_size)

    def create(self, actor: Actor, payload: JobPostCreate) -> JobPost:
        company = self.uow.companies.first(Company.owner_id == actor.user_id)
        if company is None:
            raise ValidationError("You need an approved company before posting jobs")

        job = JobPost(
            company_id=company.id,
            created_by_user_id=actor.user_id,
            status=JobPostStatus.PENDING.value,
            view_count=0,
            application_count=0,
            **payload.model_dump(exclude={"shifts", "required_skills"}),
        )
        job.shifts = [JobShift(**shift.model_dump()) for shift in payload.shifts]
        job.skills = [
            JobPostSkill(skill_name=name.strip())
            for name in dict.fromkeys(payload.required_skills)
            if name and name.strip()
        ]
        with self.uow.transaction():
            self.uow.job_posts.add(job)

        logger.info("Job post %s created for company %s by user %s", job.id, company.id, actor.user_id)
        return job

    def update(self, job_post_id: int, actor: Actor, payload: JobPostUpdate) -> JobPost:
        job = self._managed_job(job_post_id, actor)

        changes = payload.model_dump(exclude_unset=True)
        salary_min = changes.get("salary_min", job.salary_min)
        salary_max = changes.get("salary_max", job.salary_max)
        if salary_min is not None and salary_max is not None and salary_min > salary_max:
            raise ValidationError("salary_min cannot exceed salary_max")

        for name, value in changes.items():
            if name in ("title", "description") and value is None:
                continue
            setattr(job, name, value)

        with self.uow.transaction():
            self.uow.job_posts.update(job)
        return job

    def change_status(self, job_post_id: int, actor: Actor, status: JobPostStatus) -> JobPost:
        job = self._managed_job(job_post_id, actor)
        previous = job.status
        job.status = status.value
        with self.uow.transaction():
            self.uow.job_posts.update(job)

        logger.info("Job post %s status %s -> %s by user %s", job.id, previous, job.status, actor.user_id)
        return job

    def delete(self, job_post_id: int, actor: Actor) -> None:
        job = self._managed_job(job_post_id, actor)
        self.remove(job)
        logger.info("Job post %s deleted by user %s", job.id, actor.user_id)

    def remove(self, job: JobPost) -> None:
        """Soft-delete a job post together with its applications."""
        now = utcnow()
        with self.uow.transaction():
            for application in self.uow.applications.find(Application.job_post_id == job.id):
                application.deleted_at = now
                self.uow.applications.update(application)
            job.deleted_at = now
            self.uow.job_posts.update(job)

    def _managed_job(self, job_post_id: int, actor: Actor) -> JobPost:
        job = self.uow.job_posts.get(job_post_id)
        if job is None:
            raise NotFoundError("Job post not found")
        if not can_manage_job(self.uow, job, actor):
            raise PermissionDeniedError("You don't have permission to modify this job post")
        return job
