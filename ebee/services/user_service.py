"""
User administration: listing, editing, approval and removal.
"""
from typing import List

from sqlalchemy.orm import Session

from ebee.core import security
from ebee.core.logging import get_logger, log_business_event, log_security_event
from ebee.db import models
from ebee.schemas.user import UserUpdate
from ebee.utils.exceptions import ConflictError, NotFoundError, PermissionDeniedError

logger = get_logger(__name__)


class UserService:
    """Service class for user-related business logic."""

    def __init__(self, db: Session):
        self.db = db

    def get_all_users(self) -> List[models.User]:
        return self.db.query(models.User).order_by(models.User.id).all()

    def get_user(self, user_id: int) -> models.User:
        user = self.db.get(models.User, user_id)
        if not user:
            raise NotFoundError("User")
        return user

    def update_user(self, current_user: models.User, user_id: int, update_data: UserUpdate) -> models.User:
        user = self.get_user(user_id)
        changes = update_data.model_dump(exclude_unset=True)

        if (
            user.id == current_user.id
            and "user_type" in changes
            and changes["user_type"] != models.UserType.admin
        ):
            log_security_event("self_demotion_blocked", user_id=current_user.id)
            raise PermissionDeniedError("You cannot remove your own admin role")

        if changes.get("email") and changes["email"].lower() != user.email:
            email = changes["email"].lower()
            if self.db.query(models.User).filter(models.User.email == email).first():
                raise ConflictError("Email already in use")
            changes["email"] = email

        password = changes.pop("password", None)
        if password:
            user.hashed_password = security.hash_password(password)

        for key, value in changes.items():
            if value is not None:
                setattr(user, key, value)

        self.db.commit()
        self.db.refresh(user)
        log_business_event("user_updated", current_user.id, target_user_id=user.id)
        return user

    def approve_user(self, user_id: int, is_approved: bool = True) -> models.User:
        user = self.get_user(user_id)
        user.is_approved = is_approved
        self.db.commit()
        self.db.refresh(user)
        log_business_event("user_approved", user.id, is_approved=is_approved)
        return user

    def delete_user(self, user_id: int) -> None:
        user = self.get_user(user_id)
        self.db.delete(user)
        self.db.commit()
        logger.info("User deleted", user_id=user_id)
