"""
Product service layer for business logic separation.
"""
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from ebee.core.logging import get_logger, log_business_event
from ebee.db import models
from ebee.schemas.product import ProductSearch, ProductUpdate
from ebee.utils import image_utils
from ebee.utils.exceptions import AuthError, DatabaseError, NotFoundError, ValidationError

logger = get_logger(__name__)

PRODUCT_IMAGE_FOLDER = "products"


def _blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class ProductService:
    """Service class for product-related business logic."""

    def __init__(self, db: Session):
        self.db = db

    def create_product(
        self,
        current_user: Optional[models.User],
        image,
        name: Optional[str] = None,
        description: Optional[str] = None,
        price: Optional[str] = None,
        category: Optional[str] = None,
        stock_quantity: Optional[str] = None,
    ) -> models.Product:
        """Validate, upload the image, then insert; the upload is undone if the insert fails."""
        if current_user is None:
            raise AuthError()
        if image is None:
            raise ValidationError("An image is required")
        if any(_blank(v) for v in (name, description, price, category, stock_quantity)):
            raise ValidationError("Missing required fields")

        price_value, stock_value = self._parse_numbers(price, stock_quantity)
        category_value = self._parse_category(category)

        uploaded = image_utils.upload_image(image, folder=PRODUCT_IMAGE_FOLDER)

        product = models.Product(
            name=name.strip(),
            description=description,
            price=price_value,
            category=category_value,
            stock_quantity=stock_value,
            image_url=uploaded["url"],
            cloudinary_id=uploaded["public_id"],
            supplier_id=current_user.id,
        )
        try:
            self.db.add(product)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Product insert failed; removing uploaded image",
                         public_id=uploaded["public_id"], error=str(e))
            image_utils.discard_image(uploaded["public_id"])
            raise DatabaseError()
        self.db.refresh(product)

        log_business_event("product_created", current_user.id, product_id=product.id)
        return product

    def get_product(self, product_id: int) -> models.Product:
        """Get product by ID or raise NotFoundError."""
        product = (
            self.db.query(models.Product)
            .options(
                selectinload(models.Product.feedbacks).selectinload(models.Feedback.user),
                selectinload(models.Product.supplier),
            )
            .filter(models.Product.id == product_id)
            .first()
        )
        if not product:
            raise NotFoundError("Product")
        return product

    def get_all_products(self) -> List[models.Product]:
        return (
            self.db.query(models.Product)
            .options(
                selectinload(models.Product.feedbacks).selectinload(models.Feedback.user),
                selectinload(models.Product.supplier),
            )
            .order_by(models.Product.id)
            .all()
        )

    def search_products(self, criteria: ProductSearch) -> List[models.Product]:
        """Case-insensitive substring on name/description, exact on price/category."""
        query = self.db.query(models.Product)
        if criteria.name:
            query = query.filter(func.lower(models.Product.name).contains(criteria.name.lower()))
        if criteria.description:
            query = query.filter(func.lower(models.Product.description).contains(criteria.description.lower()))
        if criteria.price is not None:
            query = query.filter(models.Product.price == criteria.price)
        if criteria.category:
            query = query.filter(models.Product.category == criteria.category)
        return query.order_by(models.Product.id).all()

    def update_product(self, product_id: int, update_data: ProductUpdate, image=None) -> models.Product:
        """Apply a partial update; a new image replaces the old one only after the row is saved."""
        product = self.db.get(models.Product, product_id)
        if not product:
            raise NotFoundError("Product")

        old_public_id = self._public_id(product)
        uploaded = None
        if image is not None:
            uploaded = image_utils.upload_image(image, folder=PRODUCT_IMAGE_FOLDER)

        for key, value in update_data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(product, key, value)
        if uploaded:
            product.image_url = uploaded["url"]
            product.cloudinary_id = uploaded["public_id"]

        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Product update failed", product_id=product_id, error=str(e))
            if uploaded:
                image_utils.discard_image(uploaded["public_id"])
            raise DatabaseError()

        if uploaded and old_public_id:
            image_utils.discard_image(old_public_id)

        self.db.refresh(product)
        return product

    def delete_product(self, product_id: int) -> None:
        product = self.db.get(models.Product, product_id)
        if not product:
            raise NotFoundError("Product")

        public_id = self._public_id(product)
        if public_id:
            image_utils.discard_image(public_id)

        self.db.delete(product)
        self.db.commit()
        log_business_event("product_deleted", product_id=product_id)

    @staticmethod
    def _public_id(product: models.Product) -> Optional[str]:
        # Older rows only kept the delivery URL
        return product.cloudinary_id or image_utils.get_public_id_from_url(product.image_url)

    @staticmethod
    def _parse_numbers(price, stock_quantity):
        try:
            price_value = round(float(price), 2)
            stock_value = int(stock_quantity)
        except (TypeError, ValueError):
            raise ValidationError("Price and stockQuantity must be numbers")
        if price_value < 0:
            raise ValidationError("Price cannot be negative")
        if stock_value < 0:
            raise ValidationError("Stock quantity cannot be negative")
        return price_value, stock_value

    @staticmethod
    def _parse_category(category: str) -> models.ProductCategory:
        try:
            return models.ProductCategory(category)
        except ValueError:
            allowed = ", ".join(c.value for c in models.ProductCategory)
            raise ValidationError(f"Invalid category. Allowed: {allowed}")
