# ebee/routers/fines.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ebee.db import database, models
from ebee.schemas.common import Envelope, ok
from ebee.schemas.fine import FineCreate, FineOut, FineUpdate
from ebee.services import FineService
from ebee.utils.dependencies import get_current_user, require_staff

router = APIRouter(prefix="/fines", tags=["fines"])


@router.get("/", response_model=Envelope[List[FineOut]])
def list_fines(
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(get_current_user),
):
    return ok(FineService(db).get_all_fines())


@router.post("/", response_model=Envelope[FineOut], status_code=status.HTTP_201_CREATED)
def create_fine(
    payload: FineCreate,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(require_staff),
):
    return ok(FineService(db).create_fine(payload), "Fine created successfully")


@router.put("/{fine_id}", response_model=Envelope[FineOut])
def update_fine(
    fine_id: int,
    payload: FineUpdate,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(require_staff),
):
    return ok(FineService(db).update_fine(fine_id, payload), "Fine updated successfully")


@router.delete("/{fine_id}", response_model=Envelope[None])
def delete_fine(
    fine_id: int,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(require_staff),
):
    FineService(db).delete_fine(fine_id)
    return ok(message="Fine deleted successfully")
