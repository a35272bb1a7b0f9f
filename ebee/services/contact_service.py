from typing import List

from sqlalchemy.orm import Session

from ebee.core.logging import get_logger
from ebee.db import models
from ebee.schemas.contact import ContactCreate

logger = get_logger(__name__)


class ContactService:

    def __init__(self, db: Session):
        self.db = db

    def create_contact(self, contact_data: ContactCreate) -> models.Contact:
        contact = models.Contact(**contact_data.model_dump())
        self.db.add(contact)
        self.db.commit()
        self.db.refresh(contact)
        logger.info("Contact message received", contact_id=contact.id)
        return contact

    def get_all_contacts(self) -> List[models.Contact]:
        return self.db.query(models.Contact).order_by(models.Contact.created_at.desc(), models.Contact.id.desc()).all()
