from __future__ import annotations

from decimal import Decimal

from fastapi import APIRouter, Depends, Query, status

from ptj.api.deps import Pagination, get_current_actor, get_pagination, get_uow, require_roles
from ptj.auth import Actor
from ptj.config import settings
from ptj.models import RoleName
from ptj.repository import UnitOfWork
from ptj.schemas.application import ApplicationOut
from ptj.schemas.common import Envelope, Page
from ptj.schemas.job_post import JobPostCreate, JobPostOut, JobPostStatusUpdate, JobPostUpdate, JobSearchParams
from ptj.services.applications import ApplicationQueryService
from ptj.services.job_posts import JobPostService


router = APIRouter()
employer_only = require_roles(RoleName.EMPLOYER, RoleName.ADMIN)


@router.get("", response_model=Envelope[Page[JobPostOut]])
def list_active_job_posts(
    pagination: Pagination = Depends(get_pagination),
    uow: UnitOfWork = Depends(get_uow),
) -> Envelope[Page[JobPostOut]]:
    jobs = JobPostService(uow).list_active(pagination.page_number, pagination.page_size)
    return Envelope(data=Page.build(jobs, JobPostOut))


@router.get("/search", response_model=Envelope[Page[JobPostOut]])
def search_job_posts(
    search_term: str | None = Query(default=None, max_length=255),
    location: str | None = Query(default=None, max_length=255),
    category: str | None = Query(default=None, max_length=100),
    work_type: str | None = Query(default=None, max_length=50),
    salary_min: Decimal | None = Query(default=None, ge=0),
    sort_by: str | None = Query(default=None),
    sort_descending: bool = Query(default=True),
    page_number: int = Query(default=1, ge=1),
    page_size: int = Query(default=settings.default_page_size, ge=1, le=settings.max_page_size),
    uow: UnitOfWork = Depends(get_uow),
) -> Envelope[Page[JobPostOut]]:
    params = JobSearchParams(
        search_term=search_term,
        location=location,
        category=category,
        work_type=work_type,
        salary_min=salary_min,
        sort_by=sort_by,
        sort_descending=sort_descending,
        page_number=page_number,
        page_size=page_size,
    )
    return Envelope(data=Page.build(JobPostService(uow).search(params), JobPostOut))


@router.get("/{job_post_id}", response_model=Envelope[JobPostOut])
def get_job_post(job_post_id: int, uow: UnitOfWork = Depends(get_uow)) -> Envelope[JobPostOut]:
    return Envelope(data=JobPostOut.model_validate(JobPostService(uow).get(job_post_id)))


@router.post("", response_model=Envelope[JobPostOut], status_code=status.HTTP_201_CREATED)
def create_job_post(
    payload: JobPostCreate,
    actor: Actor = Depends(employer_only),
    uow: UnitOfWork = Depends(get_uow),
) -> Envelope[JobPostOut]:
    job = JobPostService(uow).create(actor, payload)
    return Envelope(message="Job post submitted for review", data=JobPostOut.model_validate(job))


@router.put("/{job_post_id}", response_model=Envelope[JobPostOut])
def update_job_post(
    job_post_id: int,
    payload: JobPostUpdate,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_uow),
) -> Envelope[JobPostOut]:
    job = JobPostService(uow).update(job_post_id, actor, payload)
    return Envelope(message="Job post updated successfully", data=JobPostOut.model_validate(job))


@router.patch("/{job_post_id}/status", response_model=Envelope[JobPostOut])
def change_job_post_status(
    job_post_id: int,
    payload: JobPostStatusUpdate,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_uow),
) -> Envelope[JobPostOut]:
    job = JobPostService(uow).change_status(job_post_id, actor, payload.status)
    return Envelope(message="Job post status updated", data=JobPostOut.model_validate(job))


@router.delete("/{job_post_id}", response_model=Envelope[None])
def delete_job_post(
    job_post_id: int,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_uow),
) -> Envelope[None]:
    JobPostService(uow).delete(job_post_id, actor)
    return Envelope(message="Job post deleted successfully")


@router.get("/{job_post_id}/applications", response_model=Envelope[Page[ApplicationOut]])
def list_job_post_applications(
    job_post_id: int,
    pagination: Pagination = Depends(get_pagination),
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_uow),
) -> Envelope[Page[ApplicationOut]]:
    applications = ApplicationQueryService(uow).list_for_job(
        job_post_id, actor, pagination.page_number, pagination.page_size
    )
    return Envelope(data=Page.build(applications, ApplicationOut))
