# ebee/utils/dependencies.py
from typing import Optional

from fastapi import Depends, Header
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from ebee.core import security
from ebee.core.logging import log_security_event
from ebee.db import database, models
from ebee.utils.exceptions import AuthError, PermissionDeniedError

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    x_auth_token: Optional[str] = Header(None),
    db: Session = Depends(database.get_db),
) -> models.User:
    raw = token or x_auth_token
    if not raw:
        raise AuthError("Access denied. You must be authenticated.")
    if raw.startswith("Bearer "):
        raw = raw[len("Bearer "):]

    payload = security.verify_token(raw)
    if not payload or payload.get("id") is None:
        log_security_event("invalid_token", severity="low")
        raise AuthError("Invalid token. Please log in again.")

    user = db.get(models.User, payload["id"])
    if not user:
        raise AuthError("Invalid token - user not found")
    return user


def require_role(*allowed: models.UserType):
    def role_checker(current_user: models.User = Depends(get_current_user)) -> models.User:
        if current_user.user_type not in allowed:
            log_security_event(
                "role_denied",
                user_id=current_user.id,
                user_type=current_user.user_type.value,
                required=[role.value for role in allowed],
            )
            raise PermissionDeniedError()
        return current_user
    return role_checker


require_admin = require_role(models.UserType.admin)

STAFF_ROLES = (
    models.UserType.admin,
    models.UserType.finance_manager,
    models.UserType.inventory_manager,
    models.UserType.dispatch_manager,
    models.UserType.service_manager,
    models.UserType.technician_manager,
)
require_staff = require_role(*STAFF_ROLES)
