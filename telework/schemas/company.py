# telework/schemas/company.py
from pydantic import BaseModel, Field
from typing import List

from telework.schemas.employee import Employee

class CompanyCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)

class CompanyUpdate(CompanyCreate):
    pass

class Company(BaseModel):
    id: int
    name: str
    manager_id: int
    manager_name: str
    employee_count: int

class CompanyWithEmployees(BaseModel):
    id: int
    name: str
    manager_id: int
    manager_name: str
    employees: List[Employee]
