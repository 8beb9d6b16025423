# telework/schemas/employee.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

class EmployeeSummary(BaseModel):
    """Employee as embedded in lists and telework request views."""
    id: int
    email: str
    first_name: str
    last_name: str
    position: str
    role: str
    company_id: Optional[int] = None
    company_name: Optional[str] = None
    is_assigned_to_company: bool = False

    class Config:
        from_attributes = True

class Employee(BaseModel):
    id: int
    user_id: int
    email: str
    first_name: str
    last_name: str
    position: str
    role: str
    company_id: Optional[int] = None
    company_name: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True

class EmployeeUpdate(BaseModel):
    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)
    position: str = Field(min_length=1, max_length=100)

class AssignEmployeeToCompany(BaseModel):
    employee_id: int
    company_id: int
