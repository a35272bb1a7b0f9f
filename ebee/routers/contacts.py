# ebee/routers/contacts.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ebee.db import database, models
from ebee.schemas.common import Envelope, ok
from ebee.schemas.contact import ContactCreate, ContactOut
from ebee.services import ContactService
from ebee.utils.dependencies import require_admin

router = APIRouter(prefix="/contacts", tags=["contacts"])


@router.post("/", response_model=Envelope[ContactOut], status_code=status.HTTP_201_CREATED)
def create_contact(payload: ContactCreate, db: Session = Depends(database.get_db)):
    return ok(ContactService(db).create_contact(payload), "Message received. We'll get back to you soon.")


@router.get("/", response_model=Envelope[List[ContactOut]])
def list_contacts(
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(require_admin),
):
    return ok(ContactService(db).get_all_contacts())
