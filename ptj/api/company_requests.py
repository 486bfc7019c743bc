from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ptj.api.deps import Pagination, get_current_actor, get_pagination, get_uow, require_roles
from ptj.auth import Actor
from ptj.models import RoleName
from ptj.repository import UnitOfWork
from ptj.schemas.common import Envelope, Page
from ptj.schemas.company import (
    ApproveCompanyRequest,
    CompanyAttributes,
    CompanyOut,
    CompanyRequestOut,
    RejectCompanyRequest,
)
from ptj.services.companies import CompanyService
from ptj.services.company_workflow import CompanyRegistrationWorkflow


router = APIRouter()
admin_only = require_roles(RoleName.ADMIN)


@router.post("", response_model=Envelope[CompanyRequestOut], status_code=status.HTTP_201_CREATED)
def submit_request(
    payload: CompanyAttributes,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_uow),
) -> Envelope[CompanyRequestOut]:
    request = CompanyRegistrationWorkflow(uow).submit(actor, payload)
    return Envelope(
        message="Company registration request submitted",
        data=CompanyRequestOut.model_validate(request),
    )


@router.get("/me", response_model=Envelope[list[CompanyRequestOut]])
def list_my_requests(
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_uow),
) -> Envelope[list[CompanyRequestOut]]:
    requests = CompanyService(uow).my_requests(actor)
    return Envelope(data=[CompanyRequestOut.model_validate(request) for request in requests])


@router.get("/pending", response_model=Envelope[Page[CompanyRequestOut]])
def list_pending_requests(
    pagination: Pagination = Depends(get_pagination),
    _: Actor = Depends(admin_only),
    uow: UnitOfWork = Depends(get_uow),
) -> Envelope[Page[CompanyRequestOut]]:
    requests = CompanyService(uow).pending_requests(pagination.page_number, pagination.page_size)
    return Envelope(data=Page.build(requests, CompanyRequestOut))


@router.post("/approve", response_model=Envelope[CompanyOut])
def approve_request(
    payload: ApproveCompanyRequest,
    admin: Actor = Depends(admin_only),
    uow: UnitOfWork = Depends(get_uow),
) -> Envelope[CompanyOut]:
    company = CompanyRegistrationWorkflow(uow).approve(payload.request_id, admin)
    return Envelope(message="Company registration approved", data=CompanyOut.model_validate(company))


@router.post("/reject", response_model=Envelope[CompanyRequestOut])
def reject_request(
    payload: RejectCompanyRequest,
    admin: Actor = Depends(admin_only),
    uow: UnitOfWork = Depends(get_uow),
) -> Envelope[CompanyRequestOut]:
    request = CompanyRegistrationWorkflow(uow).reject(payload.request_id, admin, payload.rejection_reason)
    return Envelope(message="Company registration rejected", data=CompanyRequestOut.model_validate(request))


@router.get("/{request_id}", response_model=Envelope[CompanyRequestOut])
def get_request(
    request_id: int,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_uow),
) -> Envelope[CompanyRequestOut]:
    return Envelope(data=CompanyRequestOut.model_validate(CompanyService(uow).get_request(request_id, actor)))
