# ebee/routers/auth.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ebee.db import database
from ebee.schemas.common import Envelope, ok
from ebee.schemas.user import (
    ChangePasswordRequest, ForgotPasswordRequest, LoginRequest, SignupOut, SignupRequest, TokenOut,
)
from ebee.services import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=Envelope[SignupOut], status_code=status.HTTP_201_CREATED)
def signup(payload: SignupRequest, db: Session = Depends(database.get_db)):
    user = AuthService(db).signup(payload)
    return ok({"user_id": user.id, "email": user.email}, "User registered successfully")


@router.post("/login", response_model=Envelope[TokenOut])
def login(payload: LoginRequest, db: Session = Depends(database.get_db)):
    token, user = AuthService(db).login(payload)
    return ok({"token": token, "token_type": "bearer", "user": user}, "Login successful")


@router.post("/forgot-password", response_model=Envelope[None])
def forgot_password(payload: ForgotPasswordRequest, db: Session = Depends(database.get_db)):
    AuthService(db).forgot_password(payload.email)
    return ok(message="Password reset link sent to your email")


@router.post("/change-password/{token}", response_model=Envelope[None])
def change_password(token: str, payload: ChangePasswordRequest, db: Session = Depends(database.get_db)):
    AuthService(db).change_password(token, payload)
    return ok(message="Password changed successfully")
