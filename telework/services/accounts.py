# telework/services/accounts.py
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from telework.core import security
from telework.core.enums import Role
from telework.core.errors import AuthenticationError, ConflictError, FeatureNotAvailableError
from telework.core.time import utcnow
from telework.db import models
from telework.schemas import token as token_schema
from telework.schemas import user as user_schema

logger = logging.getLogger(__name__)


def create_account(db: Session, user_in: user_schema.UserCreate) -> models.User:
    """Creates the User and its Employee in one transaction."""
    if db.query(models.User).filter(models.User.email == user_in.email).first():
        raise ConflictError("Email already registered")

    db_user = models.User(
        email=user_in.email,
        hashed_password=security.get_password_hash(user_in.password),
        role=Role(user_in.role).value,
        created_at=utcnow(),
    )
    db_user.employee = models.Employee(
        first_name=user_in.first_name,
        last_name=user_in.last_name,
        position=user_in.position,
    )
    db.add(db_user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Email already registered")
    db.refresh(db_user)
    logger.info("Registered %s as %s", db_user.email, db_user.role)
    return db_user


def authenticate(db: Session, email: str, password: str) -> models.User:
    user = db.query(models.User).options(
        joinedload(models.User.employee).joinedload(models.Employee.company)
    ).filter(models.User.email == email).first()
    if not user or not security.verify_password(password, user.hashed_password):
        raise AuthenticationError("Incorrect email or password")
    return user


def user_profile(user: models.User) -> user_schema.UserProfile:
    employee = user.employee
    return user_schema.UserProfile(
        id=user.id,
        email=user.email,
        role=user.role,
        created_at=user.created_at,
        first_name=employee.first_name if employee else "",
        last_name=employee.last_name if employee else "",
        position=employee.position if employee else "",
        company_id=employee.company_id if employee else None,
        company_name=employee.company_name if employee else None,
    )


def issue_tokens(user: models.User) -> token_schema.AuthResponse:
    access_token, expires_at = security.create_access_token(data={"sub": user.email, "role": user.role})
    return token_schema.AuthResponse(
        access_token=access_token,
        refresh_token=security.create_refresh_token(),
        expires_at=expires_at,
        user=user_profile(user),
    )


def refresh_access_token(refresh_token: str) -> token_schema.AuthResponse:
    # TODO: persist issued refresh tokens and rotate them on use
    raise FeatureNotAvailableError("Token refresh is not available in this version")
