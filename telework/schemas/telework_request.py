# telework/schemas/telework_request.py
from pydantic import BaseModel, Field
from typing import List, Literal, Optional
from datetime import date, datetime

from telework.core.config import settings
from telework.schemas.employee import EmployeeSummary

class TeleworkRequestCreate(BaseModel):
    telework_date: date
    reason: str = Field(min_length=settings.REASON_MIN_LENGTH, max_length=settings.REASON_MAX_LENGTH)

class TeleworkRequestProcess(BaseModel):
    status: Literal["Approved", "Rejected"]
    manager_comment: Optional[str] = Field(default=None, max_length=settings.COMMENT_MAX_LENGTH)

class TeleworkRequest(BaseModel):
    id: int
    request_date: datetime
    telework_date: date
    reason: str
    status: str
    manager_comment: Optional[str] = None
    processed_at: Optional[datetime] = None
    processed_by_manager_id: Optional[int] = None
    employee: EmployeeSummary
    processed_by_manager: Optional[EmployeeSummary] = None

    class Config:
        from_attributes = True

# --- Weekly planning ---
class StatusCounts(BaseModel):
    total_requests: int = 0
    approved_requests: int = 0
    pending_requests: int = 0
    rejected_requests: int = 0

class DailyTelework(StatusCounts):
    date: date
    day_name: str
    requests: List[TeleworkRequest] = []

class WeeklyStats(StatusCounts):
    approval_rate: float = 0.0
    unique_employees: int = 0

class WeeklyPlanning(BaseModel):
    week_start: date
    week_end: date
    daily_requests: List[DailyTelework]
    stats: WeeklyStats
