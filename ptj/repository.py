"""Generic repositories and the unit of work that commits them together."""

from __future__ import annotations

import math
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session
from sqlalchemy.orm.exc import StaleDataError

from ptj.database import SoftDeleteMixin
from ptj.errors import ConflictError
from ptj.logging_config import get_logger
from ptj.models import (
    Application,
    ApplicationHistory,
    ApplicationStatusLookup,
    Company,
    CompanyRegistrationRequest,
    JobPost,
    JobPostSkill,
    JobShift,
    Profile,
    Role,
    User,
    UserRole,
)

logger = get_logger("ptj.repository")

ModelT = TypeVar("ModelT")
ItemT = TypeVar("ItemT")


@dataclass
class PaginatedList(Generic[ItemT]):
    items: list[ItemT] = field(default_factory=list)
    total_count: int = 0
    page_number: int = 1
    page_size: int = 10

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_previous_page(self) -> bool:
        return self.page_number > 1

    @property
    def has_next_page(self) -> bool:
        return self.page_number < self.total_pages


class Repository(Generic[ModelT]):
    def __init__(self, session: Session, model: type[ModelT]) -> None:
        self.session = session
        self.model = model

    def query(self, include_deleted: bool = False) -> Query:
        query = self.session.query(self.model)
        if include_deleted:
            query = query.execution_options(include_deleted=True)
        return query

    def get(self, entity_id: int, include_deleted: bool = False) -> ModelT | None:
        return self.query(include_deleted).filter(self.model.id == entity_id).first()

    def first(self, *criteria: Any) -> ModelT | None:
        return self.query().filter(*criteria).first()

    def find(self, *criteria: Any, order_by: Any = None) -> list[ModelT]:
        query = self.query().filter(*criteria)
        if order_by is not None:
            query = query.order_by(order_by)
        return query.all()

    def exists(self, *criteria: Any) -> bool:
        return self.query().filter(*criteria).first() is not None

    def count(self, *criteria: Any) -> int:
        return self.query().filter(*criteria).count()

    def paginate(self, query: Query, page_number: int, page_size: int) -> PaginatedList[ModelT]:
        page_number = max(1, page_number)
        total = query.order_by(None).count()
        items = query.offset((page_number - 1) * page_size).limit(page_size).all()
        return PaginatedList(items=items, total_count=total, page_number=page_number, page_size=page_size)

    def add(self, entity: ModelT) -> ModelT:
        self.session.add(entity)
        return entity

    def update(self, entity: ModelT) -> ModelT:
        self.session.add(entity)
        return entity

    def remove(self, entity: ModelT) -> None:
        if isinstance(entity, SoftDeleteMixin):
            entity.soft_delete()
            self.session.add(entity)
        else:
            self.session.delete(entity)

    def restore(self, entity: ModelT) -> ModelT:
        if isinstance(entity, SoftDeleteMixin):
            entity.deleted_at = None
            self.session.add(entity)
        return entity


class UnitOfWork:
    """A single session with a repository per entity and one commit boundary.

    Storage failures on flush or commit roll the session back. Uniqueness
    and row-version violations are re-raised as ``ConflictError``. Other
    storage errors propagate unchanged.
    """

    def __init__(self, session: Session) -> None:
        self.session = session
        self.users = Repository(session, User)
        self.roles = Repository(session, Role)
        self.user_roles = Repository(session, UserRole)
        self.profiles = Repository(session, Profile)
        self.companies = Repository(session, Company)
        self.company_requests = Repository(session, CompanyRegistrationRequest)
        self.job_posts = Repository(session, JobPost)
        self.job_shifts = Repository(session, JobShift)
        self.job_post_skills = Repository(session, JobPostSkill)
        self.applications = Repository(session, Application)
        self.application_histories = Repository(session, ApplicationHistory)
        self.application_statuses = Repository(session, ApplicationStatusLookup)

    def flush(self) -> None:
        self._guard(self.session.flush)

    def commit(self) -> None:
        self._guard(self.session.commit)

    def rollback(self) -> None:
        self.session.rollback()

    @contextmanager
    def transaction(self) -> Iterator["UnitOfWork"]:
        try:
            yield self
            self.commit()
        except Exception:
            if self.session.in_transaction():
                self.rollback()
            raise

    def _guard(self, operation) -> None:
        try:
            operation()
        except IntegrityError as exc:
            self.rollback()
            logger.info("Integrity violation rolled back: %s", exc.orig)
            raise ConflictError("The change conflicts with existing data") from exc
        except StaleDataError as exc:
            self.rollback()
            logger.info("Stale write rolled back: %s", exc)
            raise ConflictError("The record was modified by another request") from exc
        except SQLAlchemyError:
            self.rollback()
            raise
