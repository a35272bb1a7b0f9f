"""
Address service layer for business logic separation.
"""
from typing import List

from sqlalchemy.orm import Session

from ebee.db import models
from ebee.schemas.address import AddressCreate, AddressUpdate
from ebee.utils.exceptions import NotFoundError


class AddressService:
    """Service class for address-related business logic."""

    def __init__(self, db: Session):
        self.db = db

    def create_address(self, current_user: models.User, address_data: AddressCreate) -> models.UserAddress:
        address = models.UserAddress(**address_data.model_dump(), user_id=current_user.id)
        self.db.add(address)
        self.db.commit()
        self.db.refresh(address)
        return address

    def get_user_addresses(self, user_id: int) -> List[models.UserAddress]:
        addresses = (
            self.db.query(models.UserAddress)
            .filter(models.UserAddress.user_id == user_id)
            .order_by(models.UserAddress.id)
            .all()
        )
        if not addresses:
            raise NotFoundError(message="No addresses found for this user")
        return addresses

    def _get_owned(self, current_user: models.User, address_id: int) -> models.UserAddress:
        """Get an address by ID, or NotFoundError when missing or not the caller's."""
        address = self.db.get(models.UserAddress, address_id)
        if not address or (
            address.user_id != current_user.id and current_user.user_type != models.UserType.admin
        ):
            raise NotFoundError("Address")
        return address

    def update_address(self, current_user: models.User, address_id: int, update_data: AddressUpdate) -> models.UserAddress:
        address = self._get_owned(current_user, address_id)
        for key, value in update_data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(address, key, value)
        self.db.commit()
        self.db.refresh(address)
        return address

    def delete_address(self, current_user: models.User, address_id: int) -> None:
        address = self._get_owned(current_user, address_id)
        self.db.delete(address)
        self.db.commit()
