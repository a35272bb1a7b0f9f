from typing import List

from sqlalchemy.orm import Session, selectinload

from ebee.core.logging import log_business_event
from ebee.db import models
from ebee.schemas.fine import FineCreate, FineUpdate
from ebee.utils.exceptions import NotFoundError


class FineService:

    def __init__(self, db: Session):
        self.db = db

    def get_all_fines(self) -> List[models.Fine]:
        return (
            self.db.query(models.Fine)
            .options(selectinload(models.Fine.user))
            .order_by(models.Fine.id)
            .all()
        )

    def get_fine(self, fine_id: int) -> models.Fine:
        fine = self.db.get(models.Fine, fine_id)
        if not fine:
            raise NotFoundError("Fine")
        return fine

    def create_fine(self, fine_data: FineCreate) -> models.Fine:
        """Record a fine and link it back onto its rental."""
        if not self.db.get(models.User, fine_data.user_id):
            raise NotFoundError("User")
        rental = self.db.get(models.Rental, fine_data.rental_id)
        if not rental:
            raise NotFoundError("Rental")

        fine = models.Fine(**fine_data.model_dump())
        self.db.add(fine)
        self.db.flush()
        rental.fine_id = fine.id
        self.db.commit()
        self.db.refresh(fine)

        log_business_event("fine_issued", fine.user_id, fine_id=fine.id, amount=fine.amount)
        return fine

    def update_fine(self, fine_id: int, update_data: FineUpdate) -> models.Fine:
        fine = self.get_fine(fine_id)
        for key, value in update_data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(fine, key, value)
        self.db.commit()
        self.db.refresh(fine)
        return fine

    def delete_fine(self, fine_id: int) -> None:
        fine = self.get_fine(fine_id)
        self.db.delete(fine)
        self.db.commit()
