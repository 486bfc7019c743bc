import pytest
from pydantic import ValidationError as PydanticValidationError

from ptj.errors import ConflictError, NotFoundError, PermissionDeniedError, ValidationError
from ptj.models import Company, CompanyRegistrationRequest, CompanyRequestStatus, RoleName, User
from ptj.schemas.company import CompanyAttributes
from ptj.services.company_workflow import CompanyRegistrationWorkflow


@pytest.fixture
def admin(admin_user, actor_for):
    return actor_for(admin_user)


def test_submit_creates_pending_request(uow, make_user, actor_for):
    requester = actor_for(make_user())
    request = CompanyRegistrationWorkflow(uow).submit(requester, CompanyAttributes(name=" Acme ", tax_code="123"))

    assert request.status == CompanyRequestStatus.PENDING.value
    assert request.company_name == "Acme"
    assert request.tax_code == "123"
    assert request.requester_id == requester.user_id


def test_submit_refuses_second_pending_request(uow, make_user, actor_for):
    requester = actor_for(make_user())
    workflow = CompanyRegistrationWorkflow(uow)
    workflow.submit(requester, CompanyAttributes(name="Acme"))

    with pytest.raises(ConflictError):
        workflow.submit(requester, CompanyAttributes(name="Acme Two"))


def test_submit_refuses_user_who_owns_a_company(uow, make_user, make_company, actor_for):
    owner = make_user(RoleName.EMPLOYER)
    make_company(owner)
    with pytest.raises(ConflictError):
        CompanyRegistrationWorkflow(uow).submit(actor_for(owner), CompanyAttributes(name="Another"))


def test_approve_creates_company_and_grants_employer(uow, db, make_user, actor_for, admin):
    user = make_user()
    workflow = CompanyRegistrationWorkflow(uow)
    request = workflow.submit(actor_for(user), CompanyAttributes(name="Acme", tax_code="123"))

    company = workflow.approve(request.id, admin)

    assert company.owner_id == user.id
    assert company.name == "Acme"
    assert company.tax_code == "123"
    assert company.is_verified
    db.refresh(request)
    assert request.status == CompanyRequestStatus.APPROVED.value
    assert request.approved_company_id == company.id
    assert request.reviewed_by == admin.user_id
    assert request.reviewed_at is not None
    assert RoleName.EMPLOYER in db.get(User, user.id).role_names


def test_approve_requires_admin(uow, make_user, make_request, actor_for):
    request = make_request(make_user())
    with pytest.raises(PermissionDeniedError):
        CompanyRegistrationWorkflow(uow).approve(request.id, actor_for(make_user(RoleName.EMPLOYER)))


def test_approve_missing_request_is_not_found(uow, admin):
    with pytest.raises(NotFoundError):
        CompanyRegistrationWorkflow(uow).approve(321, admin)


def test_resolved_request_cannot_be_resolved_again(uow, db, make_user, make_request, admin):
    request = make_request(make_user())
    workflow = CompanyRegistrationWorkflow(uow)
    workflow.approve(request.id, admin)

    with pytest.raises(ConflictError, match="already been approved"):
        workflow.approve(request.id, admin)
    with pytest.raises(ConflictError):
        workflow.reject(request.id, admin, "Duplicate submission of documents")

    db.refresh(request)
    assert request.status == CompanyRequestStatus.APPROVED.value
    assert request.rejection_reason is None
    assert db.query(Company).count() == 1


def test_second_request_for_same_requester_stays_pending(uow, db, make_user, make_request, admin):
    user = make_user()
    first = make_request(user, name="Acme", tax_code="123")
    second = make_request(user, name="Acme Holdings", tax_code="456")
    workflow = CompanyRegistrationWorkflow(uow)

    workflow.approve(first.id, admin)
    with pytest.raises(ConflictError):
        workflow.approve(second.id, admin)

    assert db.query(Company).filter(Company.owner_id == user.id).count() == 1
    db.refresh(second)
    assert second.status == CompanyRequestStatus.PENDING.value


def test_approve_refuses_taken_tax_code(uow, db, make_user, make_company, make_request, admin):
    make_company(make_user(RoleName.EMPLOYER), tax_code="123")
    request = make_request(make_user(), tax_code="123")

    with pytest.raises(ConflictError):
        CompanyRegistrationWorkflow(uow).approve(request.id, admin)
    db.refresh(request)
    assert request.status == CompanyRequestStatus.PENDING.value


def test_reject_records_reason_and_reviewer(uow, make_user, make_request, admin):
    request = make_request(make_user())

    result = CompanyRegistrationWorkflow(uow).reject(request.id, admin, "  Tax code could not be verified  ")

    assert result.status == CompanyRequestStatus.REJECTED.value
    assert result.rejection_reason == "Tax code could not be verified"
    assert result.reviewed_by == admin.user_id
    assert result.approved_company_id is None


def test_reject_requires_meaningful_reason(uow, db, make_user, make_request, admin):
    request = make_request(make_user())
    with pytest.raises(ValidationError):
        CompanyRegistrationWorkflow(uow, min_rejection_reason_length=10).reject(request.id, admin, "no")
    db.refresh(request)
    assert request.status == CompanyRequestStatus.PENDING.value


def test_rejected_requester_may_submit_again(uow, db, make_user, make_request, actor_for, admin):
    user = make_user()
    request = make_request(user)
    workflow = CompanyRegistrationWorkflow(uow)
    workflow.reject(request.id, admin, "Missing business licence")

    again = workflow.submit(actor_for(user), CompanyAttributes(name="Acme"))
    assert again.status == CompanyRequestStatus.PENDING.value
    assert db.query(CompanyRegistrationRequest).count() == 2


def test_owner_index_conflict_on_approve_rolls_back_everything(uow, db, make_user, make_company, make_request, admin, monkeypatch):
    user = make_user()
    make_company(user)
    request = make_request(user, tax_code="999")
    workflow = CompanyRegistrationWorkflow(uow)
    monkeypatch.setattr(uow.companies, "exists", lambda *criteria: False)

    with pytest.raises(ConflictError):
        workflow.approve(request.id, admin)

    assert db.query(Company).count() == 1
    db.refresh(request)
    assert request.status == CompanyRequestStatus.PENDING.value
    assert request.reviewed_by is None
    assert request.approved_company_id is None
    assert RoleName.EMPLOYER not in db.get(User, user.id).role_names


def test_blank_company_name_is_rejected():
    with pytest.raises(PydanticValidationError):
        CompanyAttributes(name="   ")
