# telework/services/employees.py
import logging
from typing import List

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from telework.core.errors import NotFoundError, PermissionDeniedError, ValidationError
from telework.core.security import Actor
from telework.db import models
from telework.schemas import employee as employee_schema
from telework.services import authorization

logger = logging.getLogger(__name__)


def _employee_query(db: Session):
    return db.query(models.Employee).options(
        joinedload(models.Employee.user), joinedload(models.Employee.company)
    )


def get_employee(db: Session, employee_id: int) -> models.Employee:
    employee = _employee_query(db).filter(models.Employee.id == employee_id).first()
    if employee is None:
        raise NotFoundError("Employee not found")
    return employee


def get_profile(db: Session, actor: Actor) -> models.Employee:
    return get_employee(db, authorization.require_employee(actor))


def update_profile(db: Session, actor: Actor, updates: employee_schema.EmployeeUpdate) -> models.Employee:
    employee = get_profile(db, actor)
    values = {field: value.strip() for field, value in updates.model_dump().items()}
    blank = [field for field, value in values.items() if not value]
    if blank:
        raise ValidationError(f"Required fields cannot be blank: {', '.join(blank)}")
    for field, value in values.items():
        setattr(employee, field, value)
    db.commit()
    return get_employee(db, employee.id)


def list_employees(db: Session, actor: Actor) -> List[models.Employee]:
    """Employees of the manager's company plus everyone not yet assigned."""
    if not authorization.can_list_employees(actor):
        raise PermissionDeniedError("Requires manager role")
    query = _employee_query(db)
    if actor.company_id is not None:
        query = query.filter(or_(
            models.Employee.company_id == actor.company_id,
            models.Employee.company_id.is_(None),
        ))
    else:
        query = query.filter(models.Employee.company_id.is_(None))
    return query.order_by(models.Employee.last_name, models.Employee.first_name, models.Employee.id).all()


def assign_to_company(db: Session, actor: Actor, employee_id: int, company_id: int) -> models.Employee:
    authorization.require_manager(actor)
    company = db.get(models.Company, company_id)
    if company is None or not authorization.can_assign_employee(actor, company):
        raise NotFoundError("Company not found or you are not allowed to assign employees to it")

    employee = get_employee(db, employee_id)
    employee.company_id = company.id
    db.commit()

    logger.info("Manager %s assigned employee %s to company %s", actor.employee_id, employee_id, company_id)
    return get_employee(db, employee_id)


def get_employee_for_manager(db: Session, actor: Actor, employee_id: int) -> models.Employee:
    authorization.require_manager(actor)
    return get_employee(db, employee_id)
