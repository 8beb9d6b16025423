# telework/api/v1/endpoints/telework_requests.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from datetime import date

from telework.db import session
from telework.core import security
from telework.schemas import telework_request as request_schema
from telework.services import planning, telework_requests

router = APIRouter()

@router.post("", response_model=request_schema.TeleworkRequest, status_code=status.HTTP_201_CREATED)
def create_request(
    request_in: request_schema.TeleworkRequestCreate,
    db: Session = Depends(session.get_db),
    actor: security.Actor = Depends(security.get_current_actor)
):
    """ Submits a telework request for a future day. """
    return telework_requests.create_request(db, actor, request_in.telework_date, request_in.reason)

@router.get("/my-requests", response_model=List[request_schema.TeleworkRequest])
def read_my_requests(
    db: Session = Depends(session.get_db),
    actor: security.Actor = Depends(security.get_current_actor)
):
    """ Returns the caller's requests, newest first. """
    return telework_requests.list_my_requests(db, actor)

@router.get("/company", response_model=List[request_schema.TeleworkRequest])
def read_company_requests(
    db: Session = Depends(session.get_db),
    manager: security.Actor = Depends(security.get_current_manager)
):
    """ Returns every request made in the manager's company, newest first. """
    return telework_requests.list_company_requests(db, manager)

@router.get("/company/weekly-planning", response_model=request_schema.WeeklyPlanning)
def read_weekly_planning(
    week_start: date,
    db: Session = Depends(session.get_db),
    manager: security.Actor = Depends(security.get_current_manager)
):
    """ Seven-day breakdown of the company's requests starting at `week_start`. """
    return planning.get_weekly_planning(db, manager, week_start)

@router.put("/{request_id}/process", response_model=request_schema.TeleworkRequest)
def process_request(
    request_id: int,
    decision: request_schema.TeleworkRequestProcess,
    db: Session = Depends(session.get_db),
    manager: security.Actor = Depends(security.get_current_manager)
):
    """ Approves or rejects a pending request. """
    return telework_requests.process_request(
        db, manager, request_id, decision.status, decision.manager_comment
    )
