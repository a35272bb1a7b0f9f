# ebee/routers/products.py
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from ebee.db import database, models
from ebee.schemas.common import Envelope, ok
from ebee.schemas.product import ProductCreatedOut, ProductOut, ProductSearch, ProductUpdate
from ebee.services import ProductService
from ebee.utils.dependencies import require_role

router = APIRouter(prefix="/products", tags=["products"])

require_product_manager = require_role(
    models.UserType.admin, models.UserType.supplier, models.UserType.inventory_manager
)


@router.post("/", response_model=Envelope[ProductCreatedOut], status_code=status.HTTP_201_CREATED)
def create_product(
    name: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    stock_quantity: Optional[str] = Form(None, alias="stockQuantity"),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(require_product_manager),
):
    product = ProductService(db).create_product(
        current_user, image,
        name=name, description=description, price=price,
        category=category, stock_quantity=stock_quantity,
    )
    return ok(product, "Product created successfully")


@router.get("/", response_model=Envelope[List[ProductOut]])
def list_products(db: Session = Depends(database.get_db)):
    return ok(ProductService(db).get_all_products())


@router.post("/search", response_model=Envelope[List[ProductOut]])
def search_products(criteria: ProductSearch, db: Session = Depends(database.get_db)):
    return ok(ProductService(db).search_products(criteria))


@router.get("/{product_id}", response_model=Envelope[ProductOut])
def get_product(product_id: int, db: Session = Depends(database.get_db)):
    return ok(ProductService(db).get_product(product_id))


@router.put("/{product_id}", response_model=Envelope[ProductOut])
def update_product(
    product_id: int,
    name: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    price: Optional[float] = Form(None),
    category: Optional[str] = Form(None),
    stock_quantity: Optional[int] = Form(None, alias="stockQuantity"),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(require_product_manager),
):
    fields = {
        "name": name, "description": description, "price": price,
        "category": category, "stock_quantity": stock_quantity,
    }
    try:
        update_data = ProductUpdate(**{k: v for k, v in fields.items() if v is not None})
    except PydanticValidationError as e:
        raise RequestValidationError(e.errors())

    service = ProductService(db)
    service.update_product(product_id, update_data, image=image)
    return ok(service.get_product(product_id), "Product updated successfully")


@router.delete("/{product_id}", response_model=Envelope[None])
def delete_product(
    product_id: int,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(require_product_manager),
):
    ProductService(db).delete_product(product_id)
    return ok(message="Product deleted successfully")
