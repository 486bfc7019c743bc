"""Pytest configuration and fixtures."""

import os
import secrets

import pytest

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", f"test-only-{secrets.token_urlsafe(32)}")
os.environ.setdefault("ENV", "test")
os.environ.setdefault("DEFAULT_ADMIN_EMAIL", "admin@ptj.test")
os.environ.setdefault("DEFAULT_ADMIN_PASSWORD", "admin-pass-123")

from fastapi.testclient import TestClient  # noqa: E402

from ptj.auth import Actor, create_access_token, hash_password  # noqa: E402
from ptj.bootstrap import seed_reference_data  # noqa: E402
from ptj.config import settings  # noqa: E402
from ptj.database import Base, SessionLocal, engine, get_db, utcnow  # noqa: E402
from ptj.main import app  # noqa: E402
from ptj.models import (  # noqa: E402
    Company,
    CompanyRegistrationRequest,
    JobPost,
    JobPostStatus,
    Profile,
    Role,
    RoleName,
    User,
    UserRole,
)
from ptj.repository import UnitOfWork  # noqa: E402


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    seed_reference_data(session, settings)
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def uow(db):
    return UnitOfWork(db)


@pytest.fixture
def client(db):
    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(*roles: str, email: str | None = None, password: str = "secret-pass-1", is_active: bool = True) -> User:
        counter["n"] += 1
        user = User(
            email=email or f"user{counter['n']}@ptj.test",
            password_hash=hash_password(password),
            full_name=f"User {counter['n']}",
            is_active=is_active,
        )
        for name in roles or (RoleName.STUDENT,):
            role = db.query(Role).filter(Role.name == name).one()
            user.user_roles.append(UserRole(role=role, assigned_at=utcnow()))
        db.add(user)
        db.commit()
        return user

    return _make_user


@pytest.fixture
def make_profile(db):
    def _make_profile(user: User, **fields) -> Profile:
        profile = Profile(user_id=user.id, first_name=fields.pop("first_name", "Test"), last_name="Student", **fields)
        db.add(profile)
        db.commit()
        return profile

    return _make_profile


@pytest.fixture
def make_company(db):
    counter = {"n": 0}

    def _make_company(owner: User, **fields) -> Company:
        counter["n"] += 1
        company = Company(owner_id=owner.id, name=fields.pop("name", f"Company {counter['n']}"), is_verified=True, **fields)
        db.add(company)
        db.commit()
        return company

    return _make_company


@pytest.fixture
def make_job(db):
    def _make_job(company: Company, status: JobPostStatus = JobPostStatus.ACTIVE, **fields) -> JobPost:
        job = JobPost(
            company_id=company.id,
            created_by_user_id=company.owner_id,
            title=fields.pop("title", "Barista"),
            description=fields.pop("description", "Weekend shifts at the campus cafe"),
            status=status.value,
            **fields,
        )
        db.add(job)
        db.commit()
        return job

    return _make_job


@pytest.fixture
def make_request(db):
    def _make_request(requester: User, name: str = "Acme", tax_code: str | None = "123") -> CompanyRegistrationRequest:
        request = CompanyRegistrationRequest(requester_id=requester.id, company_name=name, tax_code=tax_code)
        db.add(request)
        db.commit()
        return request

    return _make_request


@pytest.fixture
def admin_user(db):
    return db.query(User).filter(User.email == settings.default_admin_email).one()


@pytest.fixture
def actor_for():
    def _actor_for(user: User) -> Actor:
        return Actor(user_id=user.id, email=user.email, roles=frozenset(user.role_names))

    return _actor_for


@pytest.fixture
def auth_headers():
    def _auth_headers(user: User) -> dict[str, str]:
        token = create_access_token(user.id, roles=user.role_names, email=user.email)
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
