from __future__ import annotations

from ptj.auth import create_access_token, hash_password, verify_password
from ptj.config import Settings, settings as default_settings
from ptj.database import utcnow
from ptj.errors import AuthenticationError, ConflictError, NotFoundError, PermissionDeniedError
from ptj.logging_config import get_logger
from ptj.models import Role, RoleName, User, UserRole
from ptj.repository import UnitOfWork
from ptj.schemas.auth import AuthResponse, LoginRequest, RegisterRequest

logger = get_logger("ptj.auth")


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AuthService:
    def __init__(self, uow: UnitOfWork, settings: Settings = default_settings) -> None:
        self.uow = uow
        self.settings = settings

    def register(self, payload: RegisterRequest) -> AuthResponse:
        email = normalize_email(payload.email)
        # Soft-deleted accounts still hold their email.
        if self.uow.users.query(include_deleted=True).filter(User.email == email).first() is not None:
            raise ConflictError("Email already registered")

        role = self.uow.roles.first(Role.name == RoleName.STUDENT)
        if role is None:
            raise RuntimeError("STUDENT role is not seeded")

        user = User(
            email=email,
            password_hash=hash_password(payload.password),
            full_name=(payload.full_name or "").strip() or None,
            phone_number=payload.phone_number,
            is_active=True,
        )
        user.user_roles = [UserRole(role=role, assigned_at=utcnow())]
        with self.uow.transaction():
            self.uow.users.add(user)

        logger.info("User %s registered", user.id)
        return self._issue_token(user)

    def login(self, payload: LoginRequest) -> AuthResponse:
        user = self.uow.users.first(User.email == normalize_email(payload.email))
        if user is None or not verify_password(payload.password, user.password_hash):
            raise AuthenticationError("Invalid email or password")
        if not user.is_active:
            raise PermissionDeniedError("Account is locked")

        user.last_login_at = utcnow()
        with self.uow.transaction():
            self.uow.users.update(user)

        logger.info("User %s logged in", user.id)
        return self._issue_token(user)

    def current_user(self, user_id: int) -> User:
        user = self.uow.users.get(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def _issue_token(self, user: User) -> AuthResponse:
        roles = user.role_names
        token = create_access_token(user.id, roles=roles, email=user.email, settings=self.settings)
        return AuthResponse(
            access_token=token,
            user_id=user.id,
            email=user.email,
            full_name=user.full_name,
            roles=roles,
        )
