# telework/services/seed.py
"""Demo dataset: one manager, one company, five employees and a few requests."""
import logging
from datetime import timedelta

from sqlalchemy.orm import Session

from telework.core import security
from telework.core.enums import RequestStatus, Role
from telework.core.time import utc_today, utcnow
from telework.db import models

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"
DEMO_MANAGER = ("manager@test.com", "Jean", "Dupont", "Engineering Manager")
DEMO_COMPANY = "TechCorp Solutions"
DEMO_EMPLOYEES = [
    ("marie.martin@test.com", "Marie", "Martin", "Senior Developer"),
    ("pierre.durand@test.com", "Pierre", "Durand", "Project Lead"),
    ("sophie.leroy@test.com", "Sophie", "Leroy", "UX/UI Designer"),
    ("thomas.moreau@test.com", "Thomas", "Moreau", "Full-Stack Developer"),
    ("lucie.petit@test.com", "Lucie", "Petit", "Product Owner"),
]
# (employee email, days from today, reason, status)
DEMO_REQUESTS = [
    ("marie.martin@test.com", 2, "Urgent project work that needs deep focus", RequestStatus.PENDING),
    ("pierre.durand@test.com", 3, "Remote client meeting all afternoon", RequestStatus.APPROVED),
    ("sophie.leroy@test.com", 1, "Mockups for the new onboarding flow", RequestStatus.PENDING),
    ("thomas.moreau@test.com", 4, "Backend development in progress", RequestStatus.APPROVED),
    ("lucie.petit@test.com", 5, "Sprint planning and writing user stories", RequestStatus.REJECTED),
    ("marie.martin@test.com", 7, "Code review and performance tuning", RequestStatus.PENDING),
    ("pierre.durand@test.com", 8, "Preparing the project presentation", RequestStatus.APPROVED),
]


def _add_person(db: Session, email: str, first_name: str, last_name: str, position: str, role: Role) -> models.Employee:
    user = models.User(
        email=email,
        hashed_password=security.get_password_hash(DEMO_PASSWORD),
        role=role.value,
        created_at=utcnow(),
    )
    user.employee = models.Employee(first_name=first_name, last_name=last_name, position=position)
    db.add(user)
    db.flush()
    return user.employee


def seed_demo_data(db: Session) -> bool:
    """Seeds the demo dataset into an empty database. Returns False if users already exist."""
    if db.query(models.User.id).first() is not None:
        logger.info("Database already populated, skipping demo seed")
        return False

    manager = _add_person(db, *DEMO_MANAGER, role=Role.MANAGER)
    company = models.Company(name=DEMO_COMPANY, manager_id=manager.id)
    db.add(company)
    db.flush()
    manager.company_id = company.id

    employees = {}
    for email, first_name, last_name, position in DEMO_EMPLOYEES:
        employee = _add_person(db, email, first_name, last_name, position, role=Role.USER)
        employee.company_id = company.id
        employees[email] = employee

    today = utc_today()
    now = utcnow()
    for index, (email, days_ahead, reason, status) in enumerate(DEMO_REQUESTS):
        request = models.TeleworkRequest(
            employee_id=employees[email].id,
            request_date=now - timedelta(days=1 + index % 6),
            telework_date=today + timedelta(days=days_ahead),
            reason=reason,
            status=status.value,
        )
        if status != RequestStatus.PENDING:
            request.processed_at = now - timedelta(days=1)
            request.processed_by_manager_id = manager.id
            request.manager_comment = (
                "Approved, enjoy the quiet day." if status == RequestStatus.APPROVED
                else "Rejected: team presence required that day."
            )
        db.add(request)

    db.commit()
    logger.info("Seeded demo company %r with %d employees", DEMO_COMPANY, len(employees))
    return True
