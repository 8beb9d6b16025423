from datetime import timedelta

import pytest

from conftest import PASSWORD, actor_of, make_user
from telework.core import security
from telework.core.enums import RequestStatus
from telework.core.time import utc_today
from telework.core.errors import (
    AuthenticationError, ConflictError, FeatureNotAvailableError, NotFoundError, PermissionDeniedError,
    ValidationError,
)
from telework.db import models
from telework.schemas.employee import EmployeeUpdate
from telework.services import accounts, companies, employees, seed, telework_requests


def test_register_creates_user_and_employee(db):
    user_id = make_user(db, "alice@acme.com", first_name="Alice", position="Designer")
    user = db.get(models.User, user_id)

    assert user.role == "User"
    assert user.employee.position == "Designer"
    assert user.hashed_password != PASSWORD
    assert security.verify_password(PASSWORD, user.hashed_password)


def test_register_duplicate_email_conflicts(db):
    make_user(db, "alice@acme.com")
    with pytest.raises(ConflictError):
        make_user(db, "alice@acme.com")


def test_authenticate(db):
    make_user(db, "alice@acme.com")
    assert accounts.authenticate(db, "alice@acme.com", PASSWORD).email == "alice@acme.com"
    with pytest.raises(AuthenticationError):
        accounts.authenticate(db, "alice@acme.com", "wrong-password")
    with pytest.raises(AuthenticationError):
        accounts.authenticate(db, "nobody@acme.com", PASSWORD)


def test_refresh_is_not_available():
    with pytest.raises(FeatureNotAvailableError):
        accounts.refresh_access_token("anything")


def test_create_company_links_manager(db):
    manager_id = make_user(db, "boss@acme.com", role="Manager", first_name="Jean", last_name="Dupont")
    company = companies.create_company(db, actor_of(db, manager_id), "Acme")

    assert company.name == "Acme"
    assert company.manager_name == "Jean Dupont"
    assert company.employee_count == 1
    actor = actor_of(db, manager_id)
    assert actor.company_id == company.id
    assert actor.managed_company_id == company.id


def test_second_company_conflicts(db):
    manager_id = make_user(db, "boss@acme.com", role="Manager")
    companies.create_company(db, actor_of(db, manager_id), "Acme")
    with pytest.raises(ConflictError):
        companies.create_company(db, actor_of(db, manager_id), "Acme Two")
    assert db.query(models.Company).count() == 1


def test_users_cannot_create_companies(db):
    user_id = make_user(db, "alice@acme.com")
    with pytest.raises(PermissionDeniedError):
        companies.create_company(db, actor_of(db, user_id), "Nope")


def test_my_company_not_found_before_creation(db):
    manager_id = make_user(db, "boss@acme.com", role="Manager")
    with pytest.raises(NotFoundError):
        companies.get_my_company(db, actor_of(db, manager_id))


def test_update_and_list_my_company(db):
    manager_id = make_user(db, "boss@acme.com", role="Manager")
    companies.create_company(db, actor_of(db, manager_id), "Acme")

    updated = companies.update_my_company(db, actor_of(db, manager_id), "Acme Corp")
    assert updated.name == "Acme Corp"

    detailed = companies.get_my_company_with_employees(db, actor_of(db, manager_id))
    assert [e.email for e in detailed.employees] == ["boss@acme.com"]
    assert detailed.employees[0].company_name == "Acme Corp"


def test_assign_to_foreign_company_is_not_found(db):
    boss = make_user(db, "boss@acme.com", role="Manager")
    rival = make_user(db, "boss@globex.com", role="Manager")
    globex = companies.create_company(db, actor_of(db, rival), "Globex")
    alice = make_user(db, "alice@acme.com")

    with pytest.raises(NotFoundError):
        employees.assign_to_company(db, actor_of(db, boss), actor_of(db, alice).employee_id, globex.id)


def test_assign_unknown_employee_is_not_found(db):
    boss = make_user(db, "boss@acme.com", role="Manager")
    acme = companies.create_company(db, actor_of(db, boss), "Acme")
    with pytest.raises(NotFoundError):
        employees.assign_to_company(db, actor_of(db, boss), 999, acme.id)


def test_list_employees_shows_own_company_and_unassigned(db):
    boss = make_user(db, "boss@acme.com", role="Manager", last_name="Boss")
    acme = companies.create_company(db, actor_of(db, boss), "Acme")
    rival = make_user(db, "boss@globex.com", role="Manager", last_name="Rival")
    companies.create_company(db, actor_of(db, rival), "Globex")
    member = make_user(db, "member@acme.com", last_name="Member")
    employees.assign_to_company(db, actor_of(db, boss), actor_of(db, member).employee_id, acme.id)
    make_user(db, "free@acme.com", last_name="Free")

    listed = employees.list_employees(db, actor_of(db, boss))
    assert {e.email: e.is_assigned_to_company for e in listed} == {
        "boss@acme.com": True, "member@acme.com": True, "free@acme.com": False,
    }

    with pytest.raises(PermissionDeniedError):
        employees.list_employees(db, actor_of(db, member))


def test_update_profile(db):
    user_id = make_user(db, "alice@acme.com")
    profile = employees.update_profile(
        db, actor_of(db, user_id), EmployeeUpdate(first_name=" Alicia ", last_name="Smith", position="Lead")
    )
    assert (profile.first_name, profile.position) == ("Alicia", "Lead")


def test_blank_company_name_is_rejected(db):
    manager_id = make_user(db, "boss@acme.com", role="Manager")
    with pytest.raises(ValidationError):
        companies.create_company(db, actor_of(db, manager_id), "   ")
    assert db.query(models.Company).count() == 0

    companies.create_company(db, actor_of(db, manager_id), "Acme")
    with pytest.raises(ValidationError):
        companies.update_my_company(db, actor_of(db, manager_id), " \t ")
    assert companies.get_my_company(db, actor_of(db, manager_id)).name == "Acme"


def test_blank_profile_field_is_rejected(db):
    user_id = make_user(db, "alice@acme.com", first_name="Alice")
    with pytest.raises(ValidationError):
        employees.update_profile(
            db, actor_of(db, user_id), EmployeeUpdate(first_name="  ", last_name="Smith", position="Lead")
        )
    assert employees.get_profile(db, actor_of(db, user_id)).first_name == "Alice"


def test_deleting_processing_manager_keeps_request(db):
    boss = make_user(db, "boss@acme.com", role="Manager")
    acme = companies.create_company(db, actor_of(db, boss), "Acme")
    deputy = make_user(db, "deputy@acme.com", role="Manager", first_name="Deputy")
    alice = make_user(db, "alice@acme.com")
    for user_id in (deputy, alice):
        employees.assign_to_company(db, actor_of(db, boss), actor_of(db, user_id).employee_id, acme.id)

    request = telework_requests.create_request(
        db, actor_of(db, alice), utc_today() + timedelta(days=3), "Deputy decides on this one"
    )
    telework_requests.process_request(db, actor_of(db, deputy), request.id, RequestStatus.APPROVED)
    assert telework_requests.get_request(db, request.id).processed_by_manager_id is not None

    db.query(models.User).filter(models.User.id == deputy).delete()
    db.commit()
    db.expire_all()

    kept = telework_requests.get_request(db, request.id)
    assert kept is not None
    assert kept.processed_by_manager_id is None
    assert kept.processed_by_manager is None
    assert kept.status == RequestStatus.APPROVED.value


def test_deleting_company_unassigns_employees(db):
    boss = make_user(db, "boss@acme.com", role="Manager")
    acme = companies.create_company(db, actor_of(db, boss), "Acme")
    db.query(models.Company).filter(models.Company.id == acme.id).delete()
    db.commit()
    assert actor_of(db, boss).company_id is None


def test_deleting_user_cascades_to_employee_and_requests(db):
    user_id = make_user(db, "alice@acme.com")
    employee_id = actor_of(db, user_id).employee_id
    db.add(models.TeleworkRequest(employee_id=employee_id, telework_date=utc_today(),
                                  reason="Deleted along with the owner", status="Pending"))
    db.commit()

    db.query(models.User).filter(models.User.id == user_id).delete()
    db.commit()
    assert db.query(models.Employee).count() == 0
    assert db.query(models.TeleworkRequest).count() == 0


def test_seed_demo_data_runs_once(db):
    assert seed.seed_demo_data(db) is True
    assert db.query(models.User).count() == 1 + len(seed.DEMO_EMPLOYEES)
    assert db.query(models.Company).one().name == seed.DEMO_COMPANY
    assert db.query(models.TeleworkRequest).count() == len(seed.DEMO_REQUESTS)
    processed = db.query(models.TeleworkRequest).filter(models.TeleworkRequest.status != "Pending").all()
    assert all(r.processed_by_manager_id is not None for r in processed)

    assert seed.seed_demo_data(db) is False
