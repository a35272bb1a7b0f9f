# ebee/routers/users.py
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ebee.db import database, models
from ebee.schemas.common import Envelope, ok
from ebee.schemas.user import UserApprove, UserOut, UserUpdate
from ebee.services import UserService
from ebee.utils.dependencies import get_current_user, require_admin, require_staff

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/", response_model=Envelope[List[UserOut]])
def list_users(
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(require_staff),
):
    return ok(UserService(db).get_all_users())


@router.get("/me", response_model=Envelope[UserOut])
def get_me(current_user: models.User = Depends(get_current_user)):
    return ok(current_user)


@router.get("/{user_id}", response_model=Envelope[UserOut])
def get_user(
    user_id: int,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(get_current_user),
):
    return ok(UserService(db).get_user(user_id))


@router.put("/{user_id}", response_model=Envelope[UserOut])
def update_user(
    user_id: int,
    payload: UserUpdate,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(require_admin),
):
    return ok(UserService(db).update_user(current_user, user_id, payload), "User updated successfully")


@router.put("/{user_id}/approve", response_model=Envelope[UserOut])
def approve_user(
    user_id: int,
    payload: Optional[UserApprove] = None,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(require_admin),
):
    user = UserService(db).approve_user(user_id, payload.is_approved if payload else True)
    return ok(user, "User approval status updated")


@router.delete("/{user_id}", response_model=Envelope[None])
def delete_user(
    user_id: int,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(require_admin),
):
    UserService(db).delete_user(user_id)
    return ok(message="User deleted successfully")
