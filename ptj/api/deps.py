from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass

from fastapi import Depends, HTTPException, Query, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from ptj.auth import Actor, decode_access_token
from ptj.config import settings
from ptj.database import get_db
from ptj.models import User
from ptj.repository import UnitOfWork

security = HTTPBearer(auto_error=False)


def get_uow(db: Session = Depends(get_db)) -> Iterator[UnitOfWork]:
    yield UnitOfWork(db)


def get_current_actor(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    uow: UnitOfWork = Depends(get_uow),
) -> Actor:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    # Roles come from the database so a lock or a new grant applies immediately.
    user = uow.users.first(User.id == payload["sub"], User.is_active.is_(True))
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid user")
    return Actor(user_id=user.id, email=user.email, roles=frozenset(user.role_names))


def require_roles(*roles: str) -> Callable[..., Actor]:
    def dependency(actor: Actor = Depends(get_current_actor)) -> Actor:
        if not actor.has_role(*roles):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
        return actor

    return dependency


@dataclass
class Pagination:
    page_number: int
    page_size: int


def get_pagination(
    page_number: int = Query(default=1, ge=1),
    page_size: int = Query(default=settings.default_page_size, ge=1, le=settings.max_page_size),
) -> Pagination:
    return Pagination(page_number=page_number, page_size=page_size)
