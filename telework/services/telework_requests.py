# telework/services/telework_requests.py
"""Lifecycle of telework requests: creation, listing and manager processing.

A request starts Pending and is moved exactly once to Approved or Rejected.
Both write paths are guarded at the storage level as well as in Python:
creation by the partial unique index on (employee_id, telework_date) for
live requests, processing by a conditional UPDATE on ``status = 'Pending'``.
"""
import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from telework.core.config import settings
from telework.core.enums import RequestStatus
from telework.core.errors import ConflictError, InvalidTransitionError, NotFoundError, ValidationError
from telework.core.security import Actor
from telework.core.time import utc_today, utcnow
from telework.db import models
from telework.services import authorization

logger = logging.getLogger(__name__)

TERMINAL_STATUSES = (RequestStatus.APPROVED, RequestStatus.REJECTED)


def with_view_relations(query):
    """Eager-load everything the request view denormalizes."""
    return query.options(
        joinedload(models.TeleworkRequest.employee).joinedload(models.Employee.user),
        joinedload(models.TeleworkRequest.employee).joinedload(models.Employee.company),
        joinedload(models.TeleworkRequest.processed_by_manager).joinedload(models.Employee.user),
        joinedload(models.TeleworkRequest.processed_by_manager).joinedload(models.Employee.company),
    )


def validate_reason(reason: str) -> str:
    reason = (reason or "").strip()
    if not settings.REASON_MIN_LENGTH <= len(reason) <= settings.REASON_MAX_LENGTH:
        raise ValidationError(
            f"Reason must be between {settings.REASON_MIN_LENGTH} and "
            f"{settings.REASON_MAX_LENGTH} characters"
        )
    return reason


def _live_request_exists(db: Session, employee_id: int, telework_date: date) -> bool:
    return db.query(models.TeleworkRequest.id).filter(
        models.TeleworkRequest.employee_id == employee_id,
        models.TeleworkRequest.telework_date == telework_date,
        models.TeleworkRequest.status != RequestStatus.REJECTED.value,
    ).first() is not None


def create_request(
    db: Session,
    actor: Actor,
    telework_date: date,
    reason: str,
    today: Optional[date] = None,
) -> models.TeleworkRequest:
    employee_id = authorization.require_employee(actor)

    today = today or utc_today()
    if telework_date <= today:
        raise ValidationError("Telework date must be in the future")
    reason = validate_reason(reason)

    if _live_request_exists(db, employee_id, telework_date):
        raise ConflictError("You already have a telework request for this date")

    request = models.TeleworkRequest(
        employee_id=employee_id,
        request_date=utcnow(),
        telework_date=telework_date,
        reason=reason,
        status=RequestStatus.PENDING.value,
    )
    db.add(request)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent create for the same day won the race
        db.rollback()
        raise ConflictError("You already have a telework request for this date")

    logger.info("Employee %s requested telework on %s (request %s)", employee_id, telework_date, request.id)
    return get_request(db, request.id)


def get_request(db: Session, request_id: int) -> Optional[models.TeleworkRequest]:
    return with_view_relations(db.query(models.TeleworkRequest)).filter(
        models.TeleworkRequest.id == request_id
    ).first()


def list_my_requests(db: Session, actor: Actor) -> List[models.TeleworkRequest]:
    employee_id = authorization.require_employee(actor)
    return with_view_relations(db.query(models.TeleworkRequest)).filter(
        models.TeleworkRequest.employee_id == employee_id
    ).order_by(models.TeleworkRequest.request_date.desc(), models.TeleworkRequest.id).all()


def company_requests_query(db: Session, company_id: int):
    return with_view_relations(db.query(models.TeleworkRequest)).join(
        models.Employee, models.TeleworkRequest.employee_id == models.Employee.id
    ).filter(models.Employee.company_id == company_id)


def list_company_requests(db: Session, actor: Actor) -> List[models.TeleworkRequest]:
    company_id = authorization.require_company_scope(actor)
    return company_requests_query(db, company_id).order_by(
        models.TeleworkRequest.request_date.desc(), models.TeleworkRequest.id
    ).all()


def process_request(
    db: Session,
    actor: Actor,
    request_id: int,
    new_status: RequestStatus,
    comment: Optional[str] = None,
) -> models.TeleworkRequest:
    authorization.require_company_scope(actor)
    new_status = RequestStatus(new_status)
    if new_status not in TERMINAL_STATUSES:
        raise ValidationError("Status must be 'Approved' or 'Rejected'")
    if comment is not None:
        comment = comment.strip() or None
        if comment and len(comment) > settings.COMMENT_MAX_LENGTH:
            raise ValidationError(f"Comment cannot exceed {settings.COMMENT_MAX_LENGTH} characters")

    request = get_request(db, request_id)
    if request is None or not authorization.request_in_scope(actor, request.employee.company_id):
        raise NotFoundError("Request not found or you are not allowed to process it")
    if not authorization.can_process_request(actor, request):
        raise InvalidTransitionError("This request has already been processed")

    updated = db.query(models.TeleworkRequest).filter(
        models.TeleworkRequest.id == request_id,
        models.TeleworkRequest.status == RequestStatus.PENDING.value,
    ).update(
        {
            models.TeleworkRequest.status: new_status.value,
            models.TeleworkRequest.manager_comment: comment,
            models.TeleworkRequest.processed_at: utcnow(),
            models.TeleworkRequest.processed_by_manager_id: actor.employee_id,
        },
        synchronize_session=False,
    )
    if updated != 1:
        db.rollback()
        raise InvalidTransitionError("This request has already been processed")
    db.commit()

    logger.info("Manager %s set request %s to %s", actor.employee_id, request_id, new_status.value)
    return get_request(db, request_id)
