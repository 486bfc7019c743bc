from __future__ import annotations

from collections import Counter

from ptj.auth import Actor
from ptj.errors import NotFoundError, PermissionDeniedError, ValidationError
from ptj.models import Application, ApplicationHistory, ApplicationStatusLookup, Profile
from ptj.repository import PaginatedList, UnitOfWork
from ptj.schemas.application import ApplicationStatsOut
from ptj.services.application_workflow import can_manage_job


class ApplicationQueryService:
    def __init__(self, uow: UnitOfWork) -> None:
        self.uow = uow

    def get(self, application_id: int, actor: Actor) -> Application:
        application = self.uow.applications.get(application_id)
        if application is None:
            raise NotFoundError("Application not found")
        self._ensure_visible(application, actor)
        return application

    def list_for_job(self, job_post_id: int, actor: Actor, page_number: int, page_size: int) -> PaginatedList[Application]:
        job = self.uow.job_posts.get(job_post_id)
        if job is None:
            raise NotFoundError("Job post not found")
        if not can_manage_job(self.uow, job, actor):
            raise PermissionDeniedError("You don't have permission to view applications for this job")

        query = (
            self.uow.applications.query()
            .filter(Application.job_post_id == job_post_id)
            .order_by(Application.applied_at.desc(), Application.id.desc())
        )
        return self.uow.applications.paginate(query, page_number, page_size)

    def list_mine(self, actor: Actor, page_number: int, page_size: int) -> PaginatedList[Application]:
        profile = self._own_profile(actor)
        query = (
            self.uow.applications.query()
            .filter(Application.profile_id == profile.id)
            .order_by(Application.applied_at.desc(), Application.id.desc())
        )
        return self.uow.applications.paginate(query, page_number, page_size)

    def history(self, application_id: int, actor: Actor) -> list[ApplicationHistory]:
        application = self.get(application_id, actor)
        return self.uow.application_histories.find(
            ApplicationHistory.application_id == application.id,
            order_by=ApplicationHistory.id,
        )

    def stats_mine(self, actor: Actor) -> ApplicationStatsOut:
        profile = self._own_profile(actor)
        counts = Counter(
            application.status_name
            for application in self.uow.applications.find(Application.profile_id == profile.id)
        )
        statuses = self.uow.application_statuses.find(order_by=ApplicationStatusLookup.display_order)
        return ApplicationStatsOut(
            total=sum(counts.values()),
            by_status={status.name: counts.get(status.name, 0) for status in statuses},
        )

    def statuses(self) -> list[ApplicationStatusLookup]:
        return self.uow.application_statuses.find(order_by=ApplicationStatusLookup.display_order)

    def _own_profile(self, actor: Actor) -> Profile:
        profile = self.uow.profiles.first(Profile.user_id == actor.user_id)
        if profile is None:
            raise ValidationError("Profile not found")
        return profile

    def _ensure_visible(self, application: Application, actor: Actor) -> None:
        if actor.is_admin or application.applicant_user_id == actor.user_id:
            return
        job = self.uow.job_posts.get(application.job_post_id)
        if job is not None and can_manage_job(self.uow, job, actor):
            return
        raise PermissionDeniedError("You don't have permission to view this application")
