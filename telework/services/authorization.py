"""Capability checks deciding whether an actor may perform an action.

Each ``can_*`` predicate is a pure function of the actor and the target
resource. Services call them and raise; scoping failures surface as
NotFoundError so out-of-scope resources stay indistinguishable from missing
ones.
"""
from typing import Optional

from telework.core.enums import RequestStatus
from telework.core.errors import NotFoundError, PermissionDeniedError
from telework.core.security import Actor
from telework.db import models


def can_create_company(actor: Actor) -> bool:
    return actor.is_manager and actor.managed_company_id is None


def can_manage_company(actor: Actor, company: models.Company) -> bool:
    return actor.is_manager and actor.managed_company_id == company.id


def can_list_employees(actor: Actor) -> bool:
    return actor.is_manager


def can_assign_employee(actor: Actor, company: models.Company) -> bool:
    return actor.is_manager and actor.employee_id is not None and company.manager_id == actor.employee_id


def can_create_request(actor: Actor) -> bool:
    return actor.employee_id is not None


def can_list_company_requests(actor: Actor) -> bool:
    return actor.is_manager and actor.company_id is not None


def can_view_weekly_planning(actor: Actor) -> bool:
    return can_list_company_requests(actor)


def request_in_scope(actor: Actor, owner_company_id: Optional[int]) -> bool:
    """True when the request's owner works in the manager's company."""
    return (
        actor.is_manager
        and actor.company_id is not None
        and owner_company_id == actor.company_id
    )


def can_process_request(actor: Actor, request: models.TeleworkRequest) -> bool:
    return (
        request_in_scope(actor, request.employee.company_id)
        and request.status == RequestStatus.PENDING.value
    )


def require_employee(actor: Actor) -> int:
    if not can_create_request(actor):
        raise NotFoundError("Employee not found")
    return actor.employee_id


def require_manager(actor: Actor) -> None:
    if not actor.is_manager:
        raise PermissionDeniedError("Requires manager role")


def require_company_scope(actor: Actor) -> int:
    require_manager(actor)
    if not can_list_company_requests(actor):
        raise NotFoundError("You must create or join a company first")
    return actor.company_id
