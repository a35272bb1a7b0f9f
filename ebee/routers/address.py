# ebee/routers/address.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ebee.db import database, models
from ebee.schemas.address import AddressCreate, AddressOut, AddressUpdate
from ebee.schemas.common import Envelope, ok
from ebee.services import AddressService
from ebee.utils.dependencies import get_current_user

router = APIRouter(prefix="/address", tags=["address"])


@router.post("/", response_model=Envelope[AddressOut], status_code=status.HTTP_201_CREATED)
def create_address(
    payload: AddressCreate,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(get_current_user),
):
    return ok(AddressService(db).create_address(current_user, payload), "Address created successfully")


@router.get("/", response_model=Envelope[List[AddressOut]])
def list_my_addresses(
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(get_current_user),
):
    return ok(AddressService(db).get_user_addresses(current_user.id))


@router.put("/{address_id}", response_model=Envelope[AddressOut])
def update_address(
    address_id: int,
    payload: AddressUpdate,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(get_current_user),
):
    address = AddressService(db).update_address(current_user, address_id, payload)
    return ok(address, "Address updated successfully")


@router.delete("/{address_id}", response_model=Envelope[None])
def delete_address(
    address_id: int,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(get_current_user),
):
    AddressService(db).delete_address(current_user, address_id)
    return ok(message="Address deleted successfully")
