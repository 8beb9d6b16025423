# telework/schemas/user.py
from pydantic import BaseModel, EmailStr, Field
from typing import Optional, Literal
from datetime import datetime

class UserBase(BaseModel):
    email: EmailStr

class UserCreate(UserBase):
    password: str = Field(min_length=6, max_length=100)
    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)
    position: str = Field(min_length=1, max_length=100)
    role: Literal["User", "Manager"] = "User"

class UserProfile(UserBase):
    id: int
    role: str
    created_at: datetime
    first_name: str = ""
    last_name: str = ""
    position: str = ""
    company_id: Optional[int] = None
    company_name: Optional[str] = None
