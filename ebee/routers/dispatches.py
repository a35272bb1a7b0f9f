# ebee/routers/dispatches.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ebee.db import database, models
from ebee.schemas.common import Envelope, ok
from ebee.schemas.dispatch import DispatchCreate, DispatchOut, DispatchUpdate
from ebee.services import DispatchService
from ebee.utils.dependencies import get_current_user, require_role

router = APIRouter(prefix="/dispatches", tags=["dispatches"])

require_dispatcher = require_role(models.UserType.admin, models.UserType.dispatch_manager)


@router.get("/", response_model=Envelope[List[DispatchOut]])
def list_dispatches(
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(get_current_user),
):
    return ok(DispatchService(db).get_all_dispatches())


@router.get("/{dispatch_id}", response_model=Envelope[DispatchOut])
def get_dispatch(
    dispatch_id: int,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(get_current_user),
):
    return ok(DispatchService(db).get_dispatch(dispatch_id))


@router.post("/", response_model=Envelope[DispatchOut], status_code=status.HTTP_201_CREATED)
def create_dispatch(
    payload: DispatchCreate,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(require_dispatcher),
):
    return ok(DispatchService(db).create_dispatch(payload), "Dispatch created successfully")


@router.put("/{dispatch_id}", response_model=Envelope[DispatchOut])
def update_dispatch(
    dispatch_id: int,
    payload: DispatchUpdate,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(
        require_role(models.UserType.admin, models.UserType.dispatch_manager, models.UserType.driver)
    ),
):
    return ok(DispatchService(db).update_dispatch(dispatch_id, payload), "Dispatch updated successfully")


@router.delete("/{dispatch_id}", response_model=Envelope[None])
def delete_dispatch(
    dispatch_id: int,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(require_dispatcher),
):
    DispatchService(db).delete_dispatch(dispatch_id)
    return ok(message="Dispatch deleted successfully")
