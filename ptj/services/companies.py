from __future__ import annotations

from sqlalchemy import or_

from ptj.auth import Actor
from ptj.errors import ConflictError, NotFoundError, PermissionDeniedError
from ptj.models import Company, CompanyRegistrationRequest, CompanyRequestStatus, JobPost
from ptj.repository import PaginatedList, UnitOfWork
from ptj.schemas.company import CompanyAttributes


class CompanyService:
    def __init__(self, uow: UnitOfWork) -> None:
        self.uow = uow

    def get(self, company_id: int) -> Company:
        company = self.uow.companies.get(company_id)
        if company is None:
            raise NotFoundError("Company not found")
        return company

    def get_for_owner(self, user_id: int) -> Company:
        company = self.uow.companies.first(Company.owner_id == user_id)
        if company is None:
            raise NotFoundError("Company not found for this user")
        return company

    def list(self, page_number: int, page_size: int, search: str | None = None) -> PaginatedList[Company]:
        query = self.uow.companies.query()
        if search and search.strip():
            term = f"%{search.strip()}%"
            query = query.filter(
                or_(
                    Company.name.ilike(term),
                    Company.industry.ilike(term),
                    Company.address.ilike(term),
                )
            )
        query = query.order_by(Company.created_at.desc(), Company.id.desc())
        return self.uow.companies.paginate(query, page_number, page_size)

    def update(self, company_id: int, actor: Actor, attrs: CompanyAttributes) -> Company:
        company = self.get(company_id)
        if company.owner_id != actor.user_id:
            raise PermissionDeniedError("You don't have permission to update this company")

        tax_code = (attrs.tax_code or "").strip() or None
        if tax_code and tax_code != company.tax_code:
            if self.uow.companies.exists(Company.tax_code == tax_code, Company.id != company.id):
                raise ConflictError("Tax code already exists")

        company.name = attrs.name.strip()
        company.description = attrs.description
        company.address = attrs.address
        company.website = attrs.website
        company.tax_code = tax_code
        company.industry = attrs.industry
        company.employee_count = attrs.employee_count
        company.founded_year = attrs.founded_year
        with self.uow.transaction():
            self.uow.companies.update(company)
        return company

    def delete(self, company_id: int, actor: Actor) -> None:
        company = self.get(company_id)
        if company.owner_id != actor.user_id:
            raise PermissionDeniedError("You don't have permission to delete this company")
        if self.uow.job_posts.exists(JobPost.company_id == company.id):
            raise ConflictError("Cannot delete company with existing job posts")

        with self.uow.transaction():
            self.uow.companies.remove(company)

    # Registration requests (read side)

    def get_request(self, request_id: int, actor: Actor) -> CompanyRegistrationRequest:
        request = self.uow.company_requests.get(request_id)
        if request is None:
            raise NotFoundError("Registration request not found")
        if not actor.is_admin and request.requester_id != actor.user_id:
            raise PermissionDeniedError("You don't have permission to view this request")
        return request

    def pending_requests(self, page_number: int, page_size: int) -> PaginatedList[CompanyRegistrationRequest]:
        query = (
            self.uow.company_requests.query()
            .filter(CompanyRegistrationRequest.status == CompanyRequestStatus.PENDING.value)
            .order_by(CompanyRegistrationRequest.created_at.asc(), CompanyRegistrationRequest.id.asc())
        )
        return self.uow.company_requests.paginate(query, page_number, page_size)

    def my_requests(self, actor: Actor) -> list[CompanyRegistrationRequest]:
        return (
            self.uow.company_requests.query()
            .filter(CompanyRegistrationRequest.requester_id == actor.user_id)
            .order_by(CompanyRegistrationRequest.created_at.desc(), CompanyRegistrationRequest.id.desc())
            .all()
        )
