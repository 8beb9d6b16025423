# telework/services/companies.py
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from telework.core.errors import ConflictError, NotFoundError, ValidationError
from telework.core.security import Actor
from telework.db import models
from telework.schemas import company as company_schema
from telework.schemas import employee as employee_schema
from telework.services import authorization

logger = logging.getLogger(__name__)

ALREADY_MANAGES = "You already have a company. A manager can only manage one company."


def to_view(company: models.Company) -> company_schema.Company:
    return company_schema.Company(
        id=company.id,
        name=company.name,
        manager_id=company.manager_id,
        manager_name=company.manager.full_name,
        employee_count=len(company.employees),
    )


def clean_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Company name is required")
    return name


def create_company(db: Session, actor: Actor, name: str) -> company_schema.Company:
    authorization.require_manager(actor)
    if not authorization.can_create_company(actor):
        raise ConflictError(ALREADY_MANAGES)

    company = models.Company(name=clean_name(name), manager_id=actor.employee_id)
    db.add(company)
    try:
        db.flush()
    except IntegrityError:
        # unique manager_id: another create for this manager got there first
        db.rollback()
        raise ConflictError(ALREADY_MANAGES)

    # The manager joins the company they created
    manager = db.get(models.Employee, actor.employee_id)
    manager.company_id = company.id
    db.commit()

    db.refresh(company)
    logger.info("Manager %s created company %s (%s)", actor.employee_id, company.id, company.name)
    return to_view(company)


def get_managed_company(db: Session, actor: Actor) -> models.Company:
    authorization.require_manager(actor)
    company = db.query(models.Company).options(
        joinedload(models.Company.manager),
        joinedload(models.Company.employees).joinedload(models.Employee.user),
    ).filter(models.Company.manager_id == actor.employee_id).first()
    if company is None or not authorization.can_manage_company(actor, company):
        raise NotFoundError("No company found for this manager")
    return company


def get_my_company(db: Session, actor: Actor) -> company_schema.Company:
    return to_view(get_managed_company(db, actor))


def update_my_company(db: Session, actor: Actor, name: str) -> company_schema.Company:
    company = get_managed_company(db, actor)
    company.name = clean_name(name)
    db.commit()
    db.refresh(company)
    return to_view(company)


def get_my_company_with_employees(db: Session, actor: Actor) -> company_schema.CompanyWithEmployees:
    company = get_managed_company(db, actor)
    return company_schema.CompanyWithEmployees(
        id=company.id,
        name=company.name,
        manager_id=company.manager_id,
        manager_name=company.manager.full_name,
        employees=[employee_schema.Employee.model_validate(e) for e in company.employees],
    )
