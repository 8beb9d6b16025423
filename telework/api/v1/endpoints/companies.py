# telework/api/v1/endpoints/companies.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from telework.db import session
from telework.core import security
from telework.schemas import company as company_schema
from telework.services import companies

router = APIRouter()

@router.post("", response_model=company_schema.Company, status_code=status.HTTP_201_CREATED)
def create_company(
    company_in: company_schema.CompanyCreate,
    db: Session = Depends(session.get_db),
    manager: security.Actor = Depends(security.get_current_manager)
):
    """ Creates the manager's company. A manager runs at most one company. """
    return companies.create_company(db, manager, company_in.name)

@router.get("/my-company", response_model=company_schema.Company)
def read_my_company(
    db: Session = Depends(session.get_db),
    manager: security.Actor = Depends(security.get_current_manager)
):
    return companies.get_my_company(db, manager)

@router.put("/my-company", response_model=company_schema.Company)
def update_my_company(
    company_in: company_schema.CompanyUpdate,
    db: Session = Depends(session.get_db),
    manager: security.Actor = Depends(security.get_current_manager)
):
    """ Renames the manager's company. """
    return companies.update_my_company(db, manager, company_in.name)

@router.get("/my-company/employees", response_model=company_schema.CompanyWithEmployees)
def read_my_company_employees(
    db: Session = Depends(session.get_db),
    manager: security.Actor = Depends(security.get_current_manager)
):
    return companies.get_my_company_with_employees(db, manager)
