"""Application lifecycle: submit, move through review, withdraw.

Every status change writes exactly one ``ApplicationHistory`` row in the
same transaction as the status update.
"""

from __future__ import annotations

from ptj.auth import Actor
from ptj.database import utcnow
from ptj.errors import ConflictError, InvalidTransitionError, NotFoundError, PermissionDeniedError, ValidationError
from ptj.logging_config import get_logger
from ptj.models import Application, ApplicationHistory, ApplicationStatus, ApplicationStatusLookup, JobPost, Profile
from ptj.repository import UnitOfWork

logger = get_logger("ptj.applications")

S = ApplicationStatus

TERMINAL_STATUSES = frozenset({S.ACCEPTED, S.REJECTED, S.WITHDRAWN, S.EXPIRED})

# Withdrawn is only reachable through withdraw().
ALLOWED_TRANSITIONS: dict[ApplicationStatus, frozenset[ApplicationStatus]] = {
    S.PENDING: frozenset({S.REVIEWING, S.SHORTLISTED, S.INTERVIEWING, S.REJECTED, S.EXPIRED}),
    S.REVIEWING: frozenset({S.SHORTLISTED, S.INTERVIEWING, S.OFFERED, S.REJECTED, S.EXPIRED}),
    S.SHORTLISTED: frozenset({S.INTERVIEWING, S.OFFERED, S.REJECTED, S.EXPIRED}),
    S.INTERVIEWING: frozenset({S.OFFERED, S.ACCEPTED, S.REJECTED, S.EXPIRED}),
    S.OFFERED: frozenset({S.ACCEPTED, S.REJECTED, S.EXPIRED}),
}


def _as_status(name: str) -> ApplicationStatus | None:
    try:
        return ApplicationStatus(name)
    except ValueError:
        return None


def is_terminal(status_name: str) -> bool:
    return _as_status(status_name) in TERMINAL_STATUSES


def can_transition(from_name: str, to_name: str) -> bool:
    source = _as_status(from_name)
    target = _as_status(to_name)
    if source is None or target is None:
        return False
    return target in ALLOWED_TRANSITIONS.get(source, frozenset())


def can_manage_job(uow: UnitOfWork, job: JobPost, actor: Actor) -> bool:
    if actor.is_admin or job.created_by_user_id == actor.user_id:
        return True
    company = job.company or uow.companies.get(job.company_id)
    return company is not None and company.owner_id == actor.user_id


class ApplicationWorkflow:
    def __init__(self, uow: UnitOfWork) -> None:
        self.uow = uow

    def create(
        self,
        job_post_id: int,
        actor: Actor,
        cover_letter: str | None = None,
        resume_url: str | None = None,
    ) -> Application:
        profile = self.uow.profiles.first(Profile.user_id == actor.user_id)
        if profile is None:
            raise ValidationError("Please create a profile before applying")

        job = self.uow.job_posts.get(job_post_id)
        if job is None:
            raise NotFoundError("Job post not found")
        if not job.is_open_for_applications():
            raise ValidationError("This job post is not accepting applications")

        if self._active_application(job.id, profile.id) is not None:
            raise ConflictError("You have already applied for this job")

        pending = self._status(S.PENDING)
        now = utcnow()
        application = Application(
            job_post_id=job.id,
            profile_id=profile.id,
            status_id=pending.id,
            cover_letter=cover_letter,
            resume_url=resume_url or profile.resume_url,
            applied_at=now,
        )
        with self.uow.transaction():
            self.uow.applications.add(application)
            job.application_count = (job.application_count or 0) + 1
            self.uow.job_posts.update(job)

        logger.info("Application %s submitted for job %s by user %s", application.id, job.id, actor.user_id)
        return application

    def change_status(
        self,
        application_id: int,
        new_status_id: int,
        actor: Actor,
        notes: str | None = None,
        expected_version: int | None = None,
    ) -> Application:
        application = self.uow.applications.get(application_id)
        if application is None:
            raise NotFoundError("Application not found")

        new_status = self.uow.application_statuses.get(new_status_id)
        if new_status is None:
            raise ValidationError("Invalid status")

        job = self.uow.job_posts.get(application.job_post_id)
        if job is None:
            raise NotFoundError("Job post not found")
        if not can_manage_job(self.uow, job, actor):
            raise PermissionDeniedError("You don't have permission to update this application")

        if expected_version is not None and expected_version != application.row_version:
            raise ConflictError("The application was modified by another request")

        current = application.status_name
        if not can_transition(current, new_status.name):
            raise InvalidTransitionError(current, new_status.name)

        self._record_transition(application, new_status, actor, notes)
        application.reviewed_by = actor.user_id
        application.reviewed_at = utcnow()
        application.review_notes = notes
        with self.uow.transaction():
            self.uow.applications.update(application)

        logger.info(
            "Application %s moved %s -> %s by user %s",
            application.id,
            current,
            new_status.name,
            actor.user_id,
        )
        return application

    def withdraw(self, application_id: int, actor: Actor) -> Application:
        application = self.uow.applications.get(application_id)
        if application is None:
            raise NotFoundError("Application not found")

        profile = self.uow.profiles.get(application.profile_id)
        if profile is None or profile.user_id != actor.user_id:
            raise PermissionDeniedError("You don't have permission to withdraw this application")

        current = application.status_name
        if is_terminal(current):
            raise InvalidTransitionError(current, S.WITHDRAWN.value)

        withdrawn = self._status(S.WITHDRAWN)
        self._record_transition(application, withdrawn, actor, "Application withdrawn by applicant")
        application.withdrawn_at = utcnow()
        with self.uow.transaction():
            self.uow.applications.update(application)

        logger.info("Application %s withdrawn by user %s", application.id, actor.user_id)
        return application

    def _record_transition(
        self,
        application: Application,
        new_status: ApplicationStatusLookup,
        actor: Actor,
        notes: str | None,
    ) -> None:
        history = ApplicationHistory(
            application_id=application.id,
            from_status_id=application.status_id,
            to_status_id=new_status.id,
            changed_by=actor.user_id,
            changed_at=utcnow(),
            notes=notes,
        )
        self.uow.application_histories.add(history)
        application.status_id = new_status.id
        application.status = new_status

    def _active_application(self, job_post_id: int, profile_id: int) -> Application | None:
        return self.uow.applications.first(
            Application.job_post_id == job_post_id,
            Application.profile_id == profile_id,
            Application.withdrawn_at.is_(None),
        )

    def _status(self, status: ApplicationStatus) -> ApplicationStatusLookup:
        lookup = self.uow.application_statuses.first(ApplicationStatusLookup.name == status.value)
        if lookup is None:
            raise RuntimeError(f"Application status '{status.value}' is not seeded")
        return lookup
