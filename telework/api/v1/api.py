# telework/api/v1/api.py
from fastapi import APIRouter
from telework.api.v1.endpoints import companies, employees, telework_requests

api_router = APIRouter()

api_router.include_router(employees.router, prefix="/employees", tags=["Employees"])
api_router.include_router(companies.router, prefix="/companies", tags=["Companies"])
api_router.include_router(telework_requests.router, prefix="/telework-requests", tags=["Telework Requests"])
