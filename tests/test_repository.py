import pytest
from sqlalchemy import text

from ptj.errors import ConflictError
from ptj.models import Company, CompanyRegistrationRequest, CompanyRequestStatus, RoleName, User
from ptj.repository import PaginatedList


def test_paginated_list_navigation():
    page = PaginatedList(items=[1, 2], total_count=5, page_number=2, page_size=2)
    assert page.total_pages == 3
    assert page.has_previous_page
    assert page.has_next_page

    last = PaginatedList(items=[5], total_count=5, page_number=3, page_size=2)
    assert not last.has_next_page
    assert PaginatedList().total_pages == 0


def test_paginate_counts_and_slices(uow, make_user):
    for _ in range(5):
        make_user()
    query = uow.users.query().order_by(User.id)

    page = uow.users.paginate(query, page_number=2, page_size=2)

    assert page.total_count == 6  # five users plus the seeded admin
    assert len(page.items) == 2
    assert page.page_number == 2
    assert page.total_pages == 3


def test_soft_deleted_rows_are_hidden(uow, make_user, make_company):
    company = make_company(make_user(RoleName.EMPLOYER))

    with uow.transaction():
        uow.companies.remove(company)

    assert company.is_deleted
    assert uow.companies.get(company.id) is None
    assert uow.companies.count() == 0
    assert uow.companies.get(company.id, include_deleted=True) is company


def test_restore_brings_row_back(uow, make_user, make_company):
    company = make_company(make_user(RoleName.EMPLOYER))
    with uow.transaction():
        uow.companies.remove(company)
    with uow.transaction():
        uow.companies.restore(company)

    assert uow.companies.get(company.id) is company


def test_soft_deleted_owner_frees_unique_slot(uow, make_user, make_company):
    owner = make_user(RoleName.EMPLOYER)
    company = make_company(owner)
    with uow.transaction():
        uow.companies.remove(company)

    with uow.transaction():
        uow.companies.add(Company(owner_id=owner.id, name="Second try"))
    assert uow.companies.count(Company.owner_id == owner.id) == 1


def test_unique_violation_becomes_conflict_and_rolls_back(uow, make_user, make_company):
    owner = make_user(RoleName.EMPLOYER)
    make_company(owner)

    with pytest.raises(ConflictError):
        with uow.transaction():
            uow.companies.add(Company(owner_id=owner.id, name="Duplicate"))

    assert uow.companies.count(Company.owner_id == owner.id) == 1


def test_stale_row_version_becomes_conflict(uow, db, make_user, make_request):
    request = make_request(make_user())
    db.execute(
        text("UPDATE company_registration_requests SET row_version = row_version + 1 WHERE id = :id"),
        {"id": request.id},
    )

    request.status = CompanyRequestStatus.REJECTED.value
    with pytest.raises(ConflictError):
        with uow.transaction():
            uow.company_requests.update(request)

    fresh = db.query(CompanyRegistrationRequest).filter(CompanyRegistrationRequest.id == request.id).one()
    db.refresh(fresh)
    assert fresh.status == CompanyRequestStatus.PENDING.value
