# telework/services/planning.py
from collections import Counter
from datetime import date, timedelta
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from telework.core.config import settings
from telework.core.enums import RequestStatus
from telework.core.errors import NotFoundError
from telework.core.security import Actor
from telework.db import models
from telework.schemas import telework_request as request_schema
from telework.services import authorization
from telework.services.telework_requests import company_requests_query

DAYS_PER_WEEK = 7

DAY_NAMES = {
    "fr": ["lundi", "mardi", "mercredi", "jeudi", "vendredi", "samedi", "dimanche"],
    "en": ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"],
}


def day_name(day: date, locale: Optional[str] = None) -> str:
    names = DAY_NAMES.get(locale or settings.DAY_NAME_LOCALE, DAY_NAMES["en"])
    return names[day.weekday()]


def approval_rate(approved: int, total: int) -> float:
    if total == 0:
        return 0.0
    return round(approved / total * 100, 1)


def _status_counts(requests: Iterable[models.TeleworkRequest]) -> dict:
    counts = Counter(r.status for r in requests)
    return {
        "total_requests": sum(counts.values()),
        "approved_requests": counts[RequestStatus.APPROVED.value],
        "pending_requests": counts[RequestStatus.PENDING.value],
        "rejected_requests": counts[RequestStatus.REJECTED.value],
    }


def build_weekly_planning(
    requests: List[models.TeleworkRequest], week_start: date
) -> request_schema.WeeklyPlanning:
    """Group an already filtered and ordered request set into a 7-day view."""
    week_end = week_start + timedelta(days=DAYS_PER_WEEK - 1)

    counts = _status_counts(requests)
    stats = request_schema.WeeklyStats(
        **counts,
        approval_rate=approval_rate(counts["approved_requests"], counts["total_requests"]),
        unique_employees=len({r.employee_id for r in requests}),
    )

    daily = []
    for offset in range(DAYS_PER_WEEK):
        current = week_start + timedelta(days=offset)
        # sorted() is stable, so equal first names keep the query order
        day_requests = sorted(
            (r for r in requests if r.telework_date == current),
            key=lambda r: r.employee.first_name,
        )
        daily.append(request_schema.DailyTelework(
            date=current,
            day_name=day_name(current),
            requests=[request_schema.TeleworkRequest.model_validate(r) for r in day_requests],
            **_status_counts(day_requests),
        ))

    return request_schema.WeeklyPlanning(
        week_start=week_start, week_end=week_end, daily_requests=daily, stats=stats
    )


def get_weekly_planning(db: Session, actor: Actor, week_start: date) -> request_schema.WeeklyPlanning:
    authorization.require_manager(actor)
    if not authorization.can_view_weekly_planning(actor):
        raise NotFoundError("You must create or join a company first")
    company_id = actor.company_id
    week_end = week_start + timedelta(days=DAYS_PER_WEEK - 1)

    requests = company_requests_query(db, company_id).filter(
        models.TeleworkRequest.telework_date >= week_start,
        models.TeleworkRequest.telework_date <= week_end,
    ).order_by(
        models.TeleworkRequest.telework_date,
        models.Employee.first_name,
        models.TeleworkRequest.employee_id,
    ).all()

    return build_weekly_planning(requests, week_start)
