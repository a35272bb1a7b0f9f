from typing import List

from sqlalchemy.orm import Session, selectinload

from ebee.core.logging import log_business_event
from ebee.db import models
from ebee.schemas.common import as_utc
from ebee.schemas.rental import RentalCreate, RentalUpdate
from ebee.utils.exceptions import NotFoundError, ValidationError


class RentalService:

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(models.Rental).options(
            selectinload(models.Rental.user), selectinload(models.Rental.product)
        )

    def get_all_rentals(self) -> List[models.Rental]:
        return self._query().order_by(models.Rental.id).all()

    def get_rental(self, rental_id: int) -> models.Rental:
        rental = self._query().filter(models.Rental.id == rental_id).first()
        if not rental:
            raise NotFoundError("Rental")
        return rental

    def create_rental(self, current_user: models.User, rental_data: RentalCreate) -> models.Rental:
        if not self.db.get(models.Product, rental_data.product_id):
            raise NotFoundError("Product")
        if rental_data.staff_id is not None and not self.db.get(models.User, rental_data.staff_id):
            raise NotFoundError("Staff member")

        rental = models.Rental(
            user_id=current_user.id,
            product_id=rental_data.product_id,
            rent_start=rental_data.rent_start,
            rent_end=rental_data.rent_end,
            price=rental_data.price,
            staff_id=rental_data.staff_id,
            status=rental_data.status or models.RentalStatus.pending,
        )
        self.db.add(rental)
        self.db.commit()
        log_business_event("rental_created", current_user.id, rental_id=rental.id)
        return self.get_rental(rental.id)

    def update_rental(self, rental_id: int, update_data: RentalUpdate) -> models.Rental:
        rental = self.get_rental(rental_id)
        changes = update_data.model_dump(exclude_unset=True, exclude_none=True)

        if "product_id" in changes and not self.db.get(models.Product, changes["product_id"]):
            raise NotFoundError("Product")
        if "fine_id" in changes and not self.db.get(models.Fine, changes["fine_id"]):
            raise NotFoundError("Fine")

        rent_start = changes.get("rent_start", rental.rent_start)
        rent_end = changes.get("rent_end", rental.rent_end)
        if as_utc(rent_end) <= as_utc(rent_start):
            raise ValidationError("rentEnd must be after rentStart")

        for key, value in changes.items():
            setattr(rental, key, value)
        self.db.commit()
        return self.get_rental(rental.id)

    def delete_rental(self, rental_id: int) -> None:
        rental = self.db.get(models.Rental, rental_id)
        if not rental:
            raise NotFoundError("Rental")
        self.db.delete(rental)
        self.db.commit()

