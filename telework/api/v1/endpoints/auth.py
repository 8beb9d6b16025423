# telework/api/v1/endpoints/auth.py
from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from telework.db import session
from telework.schemas import token as token_schema
from telework.schemas import user as user_schema
from telework.services import accounts

router = APIRouter()

@router.post("/register", response_model=token_schema.AuthResponse, status_code=status.HTTP_201_CREATED)
def register(user_in: user_schema.UserCreate, db: Session = Depends(session.get_db)):
    """ Creates a user with its employee profile and logs them in. """
    user = accounts.create_account(db, user_in)
    return accounts.issue_tokens(user)

@router.post("/token", response_model=token_schema.AuthResponse)
def login(db: Session = Depends(session.get_db), form_data: OAuth2PasswordRequestForm = Depends()):
    # OAuth2 form: the email travels in the `username` field
    user = accounts.authenticate(db, form_data.username, form_data.password)
    return accounts.issue_tokens(user)

@router.post("/refresh", response_model=token_schema.AuthResponse)
def refresh(payload: token_schema.RefreshTokenRequest):
    return accounts.refresh_access_token(payload.refresh_token)
