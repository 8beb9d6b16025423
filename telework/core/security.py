# telework/core/security.py
# Handles password hashing, JWTs, and the actor-resolving dependencies.
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session, joinedload
from jose import JWTError, jwt
from passlib.context import CryptContext

from telework.db import models, session
from telework.core.config import settings
from telework.core.enums import Role
from telework.core.errors import AuthenticationError, PermissionDeniedError
from telework.core.time import utcnow

# --- Password Hashing ---
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")
def verify_password(plain: str, hashed: str) -> bool: return pwd_context.verify(plain, hashed)
def get_password_hash(pwd: str) -> str: return pwd_context.hash(pwd)

# --- JWT Creation ---
def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> tuple[str, datetime]:
    """Returns the encoded token together with its expiry."""
    to_encode = data.copy()
    expire = utcnow() + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire, "type": "access"})
    token = jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    return token, expire

def create_refresh_token() -> str:
    # Opaque value handed to clients; nothing accepts it back yet.
    return secrets.token_urlsafe(32)


@dataclass(frozen=True)
class Actor:
    """The authenticated principal, resolved down to its Employee record."""
    user_id: int
    role: Role
    employee_id: Optional[int] = None
    company_id: Optional[int] = None
    managed_company_id: Optional[int] = None

    @property
    def is_manager(self) -> bool:
        return self.role == Role.MANAGER


def actor_for_user(user: models.User) -> Actor:
    employee = user.employee
    return Actor(
        user_id=user.id,
        role=Role(user.role),
        employee_id=employee.id if employee else None,
        company_id=employee.company_id if employee else None,
        managed_company_id=(
            employee.managed_company.id if employee and employee.managed_company else None
        ),
    )


# --- Actor-Resolving Dependencies ---
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token")

def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(session.get_db)) -> models.User:
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        email: str = payload.get("sub")
        if email is None:
            raise AuthenticationError("Could not validate credentials")
    except JWTError:
        raise AuthenticationError("Could not validate credentials")

    user = (
        db.query(models.User)
        .options(joinedload(models.User.employee).joinedload(models.Employee.managed_company))
        .filter(models.User.email == email)
        .first()
    )
    if user is None:
        raise AuthenticationError("Could not validate credentials")
    return user

def get_current_actor(current_user: models.User = Depends(get_current_user)) -> Actor:
    return actor_for_user(current_user)

def get_current_manager(actor: Actor = Depends(get_current_actor)) -> Actor:
    if not actor.is_manager:
        raise PermissionDeniedError("Requires manager role")
    return actor
