# telework/api/v1/endpoints/employees.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from telework.db import session
from telework.core import security
from telework.schemas import employee as employee_schema
from telework.services import employees

router = APIRouter()

@router.get("/profile", response_model=employee_schema.Employee)
def read_profile(
    db: Session = Depends(session.get_db),
    actor: security.Actor = Depends(security.get_current_actor)
):
    """ Returns the employee profile of the logged-in user. """
    return employees.get_profile(db, actor)

@router.put("/profile", response_model=employee_schema.Employee)
def update_profile(
    updates: employee_schema.EmployeeUpdate,
    db: Session = Depends(session.get_db),
    actor: security.Actor = Depends(security.get_current_actor)
):
    return employees.update_profile(db, actor, updates)

@router.get("", response_model=List[employee_schema.EmployeeSummary])
def list_employees(
    db: Session = Depends(session.get_db),
    manager: security.Actor = Depends(security.get_current_manager)
):
    """ Lists the manager's company members and every unassigned employee. """
    return employees.list_employees(db, manager)

@router.post("/assign-to-company", response_model=employee_schema.Employee)
def assign_to_company(
    assignment: employee_schema.AssignEmployeeToCompany,
    db: Session = Depends(session.get_db),
    manager: security.Actor = Depends(security.get_current_manager)
):
    """ Moves an employee into a company the manager runs. """
    return employees.assign_to_company(db, manager, assignment.employee_id, assignment.company_id)

@router.get("/{employee_id}", response_model=employee_schema.Employee)
def read_employee(
    employee_id: int,
    db: Session = Depends(session.get_db),
    manager: security.Actor = Depends(security.get_current_manager)
):
    return employees.get_employee_for_manager(db, manager, employee_id)
