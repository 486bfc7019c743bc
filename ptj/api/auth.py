from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ptj.api.deps import get_current_actor, get_uow
from ptj.auth import Actor
from ptj.repository import UnitOfWork
from ptj.schemas.auth import AuthResponse, LoginRequest, MeResponse, RegisterRequest
from ptj.schemas.common import Envelope
from ptj.services.auth_service import AuthService


router = APIRouter()


@router.post("/register", response_model=Envelope[AuthResponse], status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, uow: UnitOfWork = Depends(get_uow)) -> Envelope[AuthResponse]:
    return Envelope(message="Registration successful", data=AuthService(uow).register(payload))


@router.post("/login", response_model=Envelope[AuthResponse])
def login(payload: LoginRequest, uow: UnitOfWork = Depends(get_uow)) -> Envelope[AuthResponse]:
    return Envelope(message="Login successful", data=AuthService(uow).login(payload))


@router.get("/me", response_model=Envelope[MeResponse])
def me(
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_uow),
) -> Envelope[MeResponse]:
    user = AuthService(uow).current_user(actor.user_id)
    return Envelope(data=MeResponse.model_validate(user))
