from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from ptj.api.deps import Pagination, get_current_actor, get_pagination, get_uow
from ptj.auth import Actor
from ptj.repository import UnitOfWork
from ptj.schemas.common import Envelope, Page
from ptj.schemas.company import CompanyAttributes, CompanyOut
from ptj.schemas.job_post import JobPostOut
from ptj.services.companies import CompanyService
from ptj.services.job_posts import JobPostService


router = APIRouter()


@router.get("", response_model=Envelope[Page[CompanyOut]])
def list_companies(
    search: str | None = Query(default=None, max_length=255),
    pagination: Pagination = Depends(get_pagination),
    uow: UnitOfWork = Depends(get_uow),
) -> Envelope[Page[CompanyOut]]:
    companies = CompanyService(uow).list(pagination.page_number, pagination.page_size, search=search)
    return Envelope(data=Page.build(companies, CompanyOut))


@router.get("/me", response_model=Envelope[CompanyOut])
def get_my_company(
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_uow),
) -> Envelope[CompanyOut]:
    return Envelope(data=CompanyOut.model_validate(CompanyService(uow).get_for_owner(actor.user_id)))


@router.get("/{company_id}", response_model=Envelope[CompanyOut])
def get_company(company_id: int, uow: UnitOfWork = Depends(get_uow)) -> Envelope[CompanyOut]:
    return Envelope(data=CompanyOut.model_validate(CompanyService(uow).get(company_id)))


@router.get("/{company_id}/job-posts", response_model=Envelope[Page[JobPostOut]])
def list_company_job_posts(
    company_id: int,
    pagination: Pagination = Depends(get_pagination),
    uow: UnitOfWork = Depends(get_uow),
) -> Envelope[Page[JobPostOut]]:
    jobs = JobPostService(uow).list_for_company(company_id, pagination.page_number, pagination.page_size)
    return Envelope(data=Page.build(jobs, JobPostOut))


@router.put("/{company_id}", response_model=Envelope[CompanyOut])
def update_company(
    company_id: int,
    payload: CompanyAttributes,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_uow),
) -> Envelope[CompanyOut]:
    company = CompanyService(uow).update(company_id, actor, payload)
    return Envelope(message="Company updated successfully", data=CompanyOut.model_validate(company))


@router.delete("/{company_id}", response_model=Envelope[None])
def delete_company(
    company_id: int,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_uow),
) -> Envelope[None]:
    CompanyService(uow).delete(company_id, actor)
    return Envelope(message="Company deleted successfully")
