from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ptj.api.deps import Pagination, get_current_actor, get_pagination, get_uow
from ptj.auth import Actor
from ptj.repository import UnitOfWork
from ptj.schemas.application import (
    ApplicationCreate,
    ApplicationHistoryOut,
    ApplicationOut,
    ApplicationStatsOut,
    ApplicationStatusOut,
    ApplicationStatusUpdate,
)
from ptj.schemas.common import Envelope, Page
from ptj.services.application_workflow import ApplicationWorkflow
from ptj.services.applications import ApplicationQueryService


router = APIRouter()


@router.post("", response_model=Envelope[ApplicationOut], status_code=status.HTTP_201_CREATED)
def create_application(
    payload: ApplicationCreate,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_uow),
) -> Envelope[ApplicationOut]:
    application = ApplicationWorkflow(uow).create(
        payload.job_post_id,
        actor,
        cover_letter=payload.cover_letter,
        resume_url=payload.resume_url,
    )
    return Envelope(message="Application submitted successfully", data=ApplicationOut.model_validate(application))


@router.get("/me", response_model=Envelope[Page[ApplicationOut]])
def list_my_applications(
    pagination: Pagination = Depends(get_pagination),
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_uow),
) -> Envelope[Page[ApplicationOut]]:
    applications = ApplicationQueryService(uow).list_mine(actor, pagination.page_number, pagination.page_size)
    return Envelope(data=Page.build(applications, ApplicationOut))


@router.get("/me/stats", response_model=Envelope[ApplicationStatsOut])
def my_application_stats(
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_uow),
) -> Envelope[ApplicationStatsOut]:
    return Envelope(data=ApplicationQueryService(uow).stats_mine(actor))


@router.get("/statuses", response_model=Envelope[list[ApplicationStatusOut]])
def list_statuses(uow: UnitOfWork = Depends(get_uow)) -> Envelope[list[ApplicationStatusOut]]:
    statuses = ApplicationQueryService(uow).statuses()
    return Envelope(data=[ApplicationStatusOut.model_validate(item) for item in statuses])


@router.get("/{application_id}", response_model=Envelope[ApplicationOut])
def get_application(
    application_id: int,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_uow),
) -> Envelope[ApplicationOut]:
    application = ApplicationQueryService(uow).get(application_id, actor)
    return Envelope(data=ApplicationOut.model_validate(application))


@router.get("/{application_id}/history", response_model=Envelope[list[ApplicationHistoryOut]])
def get_application_history(
    application_id: int,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_uow),
) -> Envelope[list[ApplicationHistoryOut]]:
    history = ApplicationQueryService(uow).history(application_id, actor)
    return Envelope(data=[ApplicationHistoryOut.model_validate(item) for item in history])


@router.patch("/{application_id}/status", response_model=Envelope[ApplicationOut])
def update_application_status(
    application_id: int,
    payload: ApplicationStatusUpdate,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_uow),
) -> Envelope[ApplicationOut]:
    application = ApplicationWorkflow(uow).change_status(
        application_id,
        payload.status_id,
        actor,
        notes=payload.notes,
        expected_version=payload.row_version,
    )
    return Envelope(message="Application status updated", data=ApplicationOut.model_validate(application))


@router.post("/{application_id}/withdraw", response_model=Envelope[ApplicationOut])
def withdraw_application(
    application_id: int,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_uow),
) -> Envelope[ApplicationOut]:
    application = ApplicationWorkflow(uow).withdraw(application_id, actor)
    return Envelope(message="Application withdrawn", data=ApplicationOut.model_validate(application))
