"""
Signup, login and password-reset flows.
"""
import re
from datetime import datetime, timedelta, timezone
from typing import Tuple

from sqlalchemy.orm import Session

from ebee.core import security
from ebee.core.config import settings
from ebee.core.logging import get_logger, log_auth_event
from ebee.db import models
from ebee.schemas.user import ChangePasswordRequest, LoginRequest, SignupRequest
from ebee.tasks import notification_tasks
from ebee.utils.exceptions import AuthError, NotFoundError, ValidationError

logger = get_logger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class AuthService:

    def __init__(self, db: Session):
        self.db = db

    def signup(self, payload: SignupRequest) -> models.User:
        missing = [
            label for label, value in (
                ("email", payload.email),
                ("name", payload.name),
                ("phone number", payload.phone_number),
                ("password", payload.password),
            ) if not value
        ]
        if missing:
            raise ValidationError("Please fill in " + ", ".join(missing) + "!")

        email = payload.email.strip().lower()
        if not EMAIL_PATTERN.match(email):
            raise ValidationError("Please use a valid email!")

        if self.db.query(models.User).filter(models.User.email == email).first():
            raise ValidationError("User already registered")

        user = models.User(
            email=email,
            name=payload.name,
            phone_number=payload.phone_number,
            hashed_password=security.hash_password(payload.password),
            is_approved=False,
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)

        log_auth_event("signup", user.email)
        notification_tasks.send_welcome_email(user.email, user.name)
        return user

    def login(self, payload: LoginRequest) -> Tuple[str, models.User]:
        if not payload.email or not payload.password:
            raise ValidationError("Please fill in email and password!")

        email = payload.email.strip().lower()
        if not EMAIL_PATTERN.match(email):
            raise ValidationError("Please use a valid email!")

        user = self.db.query(models.User).filter(models.User.email == email).first()
        if not user:
            log_auth_event("login", email, success=False, reason="unknown_user")
            raise NotFoundError(message="User doesn't exist")

        if not security.verify_password(payload.password, user.hashed_password):
            log_auth_event("login", email, success=False, reason="bad_password")
            raise AuthError("Wrong username and password combination")

        log_auth_event("login", email)
        return security.create_access_token(user), user

    def forgot_password(self, email: str) -> None:
        user = self.db.query(models.User).filter(models.User.email == email.strip().lower()).first()
        if not user:
            raise NotFoundError(message="No such user, please register first.")

        user.reset_token = security.generate_reset_token()
        user.reset_token_expires = datetime.now(timezone.utc) + timedelta(
            minutes=settings.RESET_TOKEN_EXPIRE_MINUTES
        )
        self.db.commit()

        reset_link = f"{settings.FRONTEND_URL}/auth/reset-password/{user.reset_token}"
        notification_tasks.send_password_reset_email(user.email, user.name, reset_link)
        log_auth_event("password_reset_requested", user.email)

    def change_password(self, token: str, payload: ChangePasswordRequest) -> None:
        if not token or not payload.password:
            raise ValidationError("Reset token and new password are required.")

        user = self.db.query(models.User).filter(models.User.reset_token == token).first()
        if not user or not self._token_still_valid(user.reset_token_expires):
            raise ValidationError("Invalid or expired reset code")

        user.hashed_password = security.hash_password(payload.password)
        user.reset_token = None
        user.reset_token_expires = None
        self.db.commit()

        notification_tasks.send_reset_success_email(user.email, user.name)
        log_auth_event("password_reset", user.email)

    @staticmethod
    def _token_still_valid(expires) -> bool:
        if expires is None:
            return False
        # SQLite hands datetimes back without tzinfo
        if expires.tzinfo is None:
            expires = expires.replace(tzinfo=timezone.utc)
        return expires > datetime.now(timezone.utc)
