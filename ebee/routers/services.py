# ebee/routers/services.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ebee.db import database, models
from ebee.schemas.common import Envelope, ok
from ebee.schemas.service import ServiceCreate, ServiceOut, ServiceUpdate
from ebee.services import CatalogService
from ebee.utils.dependencies import get_current_user, require_role

router = APIRouter(prefix="/services", tags=["services"])

require_service_manager = require_role(
    models.UserType.admin, models.UserType.service_manager, models.UserType.technician_manager
)


@router.get("/", response_model=Envelope[List[ServiceOut]])
def list_services(
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(get_current_user),
):
    return ok(CatalogService(db).get_all_services())


@router.get("/{service_id}", response_model=Envelope[ServiceOut])
def get_service(
    service_id: int,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(get_current_user),
):
    return ok(CatalogService(db).get_service(service_id))


@router.post("/", response_model=Envelope[ServiceOut], status_code=status.HTTP_201_CREATED)
def create_service(
    payload: ServiceCreate,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(require_service_manager),
):
    return ok(CatalogService(db).create_service(current_user, payload), "Service created successfully")


@router.put("/{service_id}", response_model=Envelope[ServiceOut])
def update_service(
    service_id: int,
    payload: ServiceUpdate,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(require_service_manager),
):
    return ok(CatalogService(db).update_service(service_id, payload), "Service updated successfully")


@router.delete("/{service_id}", response_model=Envelope[None])
def delete_service(
    service_id: int,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(require_service_manager),
):
    CatalogService(db).delete_service(service_id)
    return ok(message="Service deleted successfully")
