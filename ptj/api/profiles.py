from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from ptj.api.deps import get_current_actor, get_uow
from ptj.auth import Actor
from ptj.repository import UnitOfWork
from ptj.schemas.common import Envelope
from ptj.schemas.profile import ProfileOut, ProfileUpsert
from ptj.services.profiles import ProfileService


router = APIRouter()


@router.get("/me", response_model=Envelope[ProfileOut])
def get_my_profile(
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_uow),
) -> Envelope[ProfileOut]:
    profile = ProfileService(uow).get_for_user(actor.user_id)
    return Envelope(data=ProfileOut.model_validate(profile))


@router.put("/me", response_model=Envelope[ProfileOut])
def upsert_my_profile(
    payload: ProfileUpsert,
    response: Response,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_uow),
) -> Envelope[ProfileOut]:
    profile, created = ProfileService(uow).upsert(actor, payload)
    if created:
        response.status_code = status.HTTP_201_CREATED
    return Envelope(
        message="Profile created successfully" if created else "Profile updated successfully",
        data=ProfileOut.model_validate(profile),
    )


@router.delete("/me", response_model=Envelope[None])
def delete_my_profile(
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_uow),
) -> Envelope[None]:
    ProfileService(uow).delete_own(actor)
    return Envelope(message="Profile deleted successfully")


@router.get("/user/{user_id}", response_model=Envelope[ProfileOut])
def get_profile_by_user(
    user_id: int,
    _: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_uow),
) -> Envelope[ProfileOut]:
    return Envelope(data=ProfileOut.model_validate(ProfileService(uow).get_for_user(user_id)))


@router.get("/{profile_id}", response_model=Envelope[ProfileOut])
def get_profile(
    profile_id: int,
    _: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_uow),
) -> Envelope[ProfileOut]:
    return Envelope(data=ProfileOut.model_validate(ProfileService(uow).get(profile_id)))
