from __future__ import annotations

from ptj.auth import Actor
from ptj.database import utcnow
from ptj.errors import NotFoundError
from ptj.logging_config import get_logger
from ptj.models import Application, Profile, ProfileCertificate, ProfileEducation, ProfileExperience, ProfileSkill
from ptj.repository import UnitOfWork
from ptj.schemas.profile import ProfileUpsert

logger = get_logger("ptj.profiles")


class ProfileService:
    def __init__(self, uow: UnitOfWork) -> None:
        self.uow = uow

    def get(self, profile_id: int) -> Profile:
        profile = self.uow.profiles.get(profile_id)
        if profile is None:
            raise NotFoundError("Profile not found")
        return profile

    def get_for_user(self, user_id: int) -> Profile:
        profile = self.uow.profiles.first(Profile.user_id == user_id)
        if profile is None:
            raise NotFoundError("Profile not found")
        return profile

    def upsert(self, actor: Actor, payload: ProfileUpsert) -> tuple[Profile, bool]:
        """Create the actor's profile or overwrite it; returns ``(profile, created)``.

        Child collections are replaced wholesale by what the payload carries.
        """
        profile = self.uow.profiles.first(Profile.user_id == actor.user_id)
        created = profile is None
        if created:
            profile = Profile(user_id=actor.user_id)

        fields = payload.model_dump(exclude={"skills", "experiences", "educations", "certificates"})
        for name, value in fields.items():
            setattr(profile, name, value)

        profile.skills = [ProfileSkill(**item.model_dump()) for item in payload.skills]
        profile.experiences = [ProfileExperience(**item.model_dump()) for item in payload.experiences]
        profile.educations = [ProfileEducation(**item.model_dump()) for item in payload.educations]
        profile.certificates = [ProfileCertificate(**item.model_dump()) for item in payload.certificates]

        with self.uow.transaction():
            if created:
                self.uow.profiles.add(profile)
            else:
                self.uow.profiles.update(profile)

        logger.info("Profile %s %s for user %s", profile.id, "created" if created else "updated", actor.user_id)
        return profile, created

    def delete_own(self, actor: Actor) -> None:
        """Soft-delete the actor's profile together with its applications."""
        profile = self.get_for_user(actor.user_id)
        now = utcnow()
        with self.uow.transaction():
            for application in self.uow.applications.find(Application.profile_id == profile.id):
                application.deleted_at = now
                self.uow.applications.update(application)
            profile.deleted_at = now
            self.uow.profiles.update(profile)
        logger.info("Profile %s deleted by user %s", profile.id, actor.user_id)
