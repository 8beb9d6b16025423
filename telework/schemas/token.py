# telework/schemas/token.py
from pydantic import BaseModel
from typing import Optional
from datetime import datetime

from telework.schemas.user import UserProfile

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"

class AuthResponse(Token):
    refresh_token: Optional[str] = None
    expires_at: datetime
    user: UserProfile

class RefreshTokenRequest(BaseModel):
    refresh_token: str
