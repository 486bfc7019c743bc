"""Company registration: a user asks for a company, an admin resolves it.

A request is resolved exactly once. Approval creates the company, marks the
request and grants the EMPLOYER role in one commit.
"""

from __future__ import annotations

from ptj.auth import Actor
from ptj.config import settings
from ptj.database import utcnow
from ptj.errors import ConflictError, NotFoundError, PermissionDeniedError, ValidationError
from ptj.logging_config import get_logger
from ptj.models import Company, CompanyRegistrationRequest, CompanyRequestStatus, Role, RoleName, UserRole
from ptj.repository import UnitOfWork
from ptj.schemas.company import CompanyAttributes

logger = get_logger("ptj.companies")


class CompanyRegistrationWorkflow:
    def __init__(self, uow: UnitOfWork, min_rejection_reason_length: int | None = None) -> None:
        self.uow = uow
        self.min_rejection_reason_length = (
            settings.min_rejection_reason_length
            if min_rejection_reason_length is None
            else min_rejection_reason_length
        )

    def submit(self, actor: Actor, attrs: CompanyAttributes) -> CompanyRegistrationRequest:
        if self.uow.companies.exists(Company.owner_id == actor.user_id):
            raise ConflictError("User already has a company")
        if self.uow.company_requests.exists(
            CompanyRegistrationRequest.requester_id == actor.user_id,
            CompanyRegistrationRequest.status == CompanyRequestStatus.PENDING.value,
        ):
            raise ConflictError("You already have a pending company registration request")

        request = CompanyRegistrationRequest(
            requester_id=actor.user_id,
            company_name=attrs.name.strip(),
            tax_code=(attrs.tax_code or "").strip() or None,
            address=attrs.address,
            website=attrs.website,
            description=attrs.description,
            industry=attrs.industry,
            employee_count=attrs.employee_count,
            founded_year=attrs.founded_year,
            status=CompanyRequestStatus.PENDING.value,
        )
        with self.uow.transaction():
            self.uow.company_requests.add(request)

        logger.info("Company registration request %s submitted by user %s", request.id, actor.user_id)
        return request

    def approve(self, request_id: int, admin: Actor) -> Company:
        self._require_admin(admin)
        request = self._pending_request(request_id)

        if self.uow.companies.exists(Company.owner_id == request.requester_id):
            raise ConflictError("User already has a company")
        if request.tax_code and self.uow.companies.exists(Company.tax_code == request.tax_code):
            raise ConflictError("Tax code already exists")

        company = Company(
            owner_id=request.requester_id,
            name=request.company_name,
            description=request.description,
            address=request.address,
            website=request.website,
            tax_code=request.tax_code,
            industry=request.industry,
            employee_count=request.employee_count,
            founded_year=request.founded_year,
            is_verified=True,
        )
        with self.uow.transaction():
            self.uow.companies.add(company)
            # company.id is needed on the request row
            self.uow.flush()

            request.status = CompanyRequestStatus.APPROVED.value
            request.reviewed_by = admin.user_id
            request.reviewed_at = utcnow()
            request.approved_company_id = company.id
            self.uow.company_requests.update(request)
            self._grant_employer_role(request.requester_id)

        logger.info(
            "Company registration request %s approved by user %s, company %s created",
            request.id,
            admin.user_id,
            company.id,
        )
        return company

    def reject(self, request_id: int, admin: Actor, reason: str) -> CompanyRegistrationRequest:
        self._require_admin(admin)
        reason = (reason or "").strip()
        if len(reason) < self.min_rejection_reason_length:
            raise ValidationError(
                f"Rejection reason must be at least {self.min_rejection_reason_length} characters"
            )

        request = self._pending_request(request_id)
        request.status = CompanyRequestStatus.REJECTED.value
        request.reviewed_by = admin.user_id
        request.reviewed_at = utcnow()
        request.rejection_reason = reason
        with self.uow.transaction():
            self.uow.company_requests.update(request)

        logger.info("Company registration request %s rejected by user %s", request.id, admin.user_id)
        return request

    def _pending_request(self, request_id: int) -> CompanyRegistrationRequest:
        request = self.uow.company_requests.get(request_id)
        if request is None:
            raise NotFoundError("Registration request not found")
        if not request.is_pending:
            raise ConflictError(f"Request has already been {request.status.lower()}")
        return request

    def _grant_employer_role(self, user_id: int) -> None:
        role = self.uow.roles.first(Role.name == RoleName.EMPLOYER)
        if role is None:
            raise RuntimeError("EMPLOYER role is not seeded")
        user = self.uow.users.get(user_id)
        if user is None:
            raise NotFoundError("Requester account not found")
        if role.name not in user.role_names:
            user.user_roles.append(UserRole(role=role, assigned_at=utcnow()))

    @staticmethod
    def _require_admin(actor: Actor) -> None:
        if not actor.is_admin:
            raise PermissionDeniedError("Only administrators can review company registrations")
