from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from ptj.api.deps import Pagination, get_pagination, get_uow, require_roles
from ptj.auth import Actor
from ptj.models import RoleName
from ptj.repository import UnitOfWork
from ptj.schemas.admin import AdminUserOut, DashboardStats
from ptj.schemas.common import Envelope, Page
from ptj.schemas.job_post import JobPostOut, JobPostStatusUpdate
from ptj.services.admin import AdminService


router = APIRouter()
admin_only = require_roles(RoleName.ADMIN)


def get_admin_service(
    admin: Actor = Depends(admin_only),
    uow: UnitOfWork = Depends(get_uow),
) -> AdminService:
    return AdminService(uow, admin)


@router.get("/dashboard", response_model=Envelope[DashboardStats])
def dashboard(service: AdminService = Depends(get_admin_service)) -> Envelope[DashboardStats]:
    return Envelope(data=service.dashboard())


@router.get("/users", response_model=Envelope[Page[AdminUserOut]])
def search_users(
    search: str | None = Query(default=None, max_length=255),
    role: str | None = Query(default=None),
    is_active: bool | None = Query(default=None),
    pagination: Pagination = Depends(get_pagination),
    service: AdminService = Depends(get_admin_service),
) -> Envelope[Page[AdminUserOut]]:
    users = service.search_users(
        pagination.page_number,
        pagination.page_size,
        search=search,
        role=role,
        is_active=is_active,
    )
    return Envelope(data=Page.build(users, AdminUserOut))


@router.post("/users/{user_id}/lock", response_model=Envelope[AdminUserOut])
def lock_user(user_id: int, service: AdminService = Depends(get_admin_service)) -> Envelope[AdminUserOut]:
    return Envelope(message="User locked", data=AdminUserOut.model_validate(service.lock_user(user_id)))


@router.post("/users/{user_id}/unlock", response_model=Envelope[AdminUserOut])
def unlock_user(user_id: int, service: AdminService = Depends(get_admin_service)) -> Envelope[AdminUserOut]:
    return Envelope(message="User unlocked", data=AdminUserOut.model_validate(service.unlock_user(user_id)))


@router.patch("/job-posts/{job_post_id}/status", response_model=Envelope[JobPostOut])
def moderate_job_post(
    job_post_id: int,
    payload: JobPostStatusUpdate,
    service: AdminService = Depends(get_admin_service),
) -> Envelope[JobPostOut]:
    job = service.moderate_job(job_post_id, payload.status)
    return Envelope(message="Job post status updated", data=JobPostOut.model_validate(job))


@router.delete("/job-posts/{job_post_id}", response_model=Envelope[None])
def delete_job_post(job_post_id: int, service: AdminService = Depends(get_admin_service)) -> Envelope[None]:
    service.delete_job(job_post_id)
    return Envelope(message="Job post deleted successfully")
