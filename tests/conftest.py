import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "testing"
os.environ["BREVO_API_KEY"] = ""

import pytest
from fastapi.testclient import TestClient

from ebee.core import security
from ebee.db import database, models
from ebee.main import app
from ebee.utils import image_utils
from tests.helpers import auth_headers


@pytest.fixture(autouse=True)
def setup_database():
    models.Base.metadata.create_all(bind=database.engine)
    yield
    models.Base.metadata.drop_all(bind=database.engine)


@pytest.fixture
def db():
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def fake_cloudinary(monkeypatch):
    """Replace the Cloudinary calls; records what was uploaded and destroyed."""
    calls = {"uploaded": [], "destroyed": []}

    def fake_upload(file, folder="products"):
        public_id = f"{folder}/img{len(calls['uploaded']) + 1}"
        calls["uploaded"].append(public_id)
        return {
            "url": f"https://res.cloudinary.com/demo/image/upload/v1/{public_id}.jpg",
            "public_id": public_id,
            "format": "jpg",
            "bytes": 1024,
        }

    def fake_discard(public_id):
        calls["destroyed"].append(public_id)

    monkeypatch.setattr(image_utils, "upload_image", fake_upload)
    monkeypatch.setattr(image_utils, "discard_image", fake_discard)
    return calls


@pytest.fixture
def make_user(db):
    def _make(user_type=models.UserType.customer, email=None, name="Test User", password="secret123"):
        user = models.User(
            name=name,
            email=email or f"{user_type.value}{db.query(models.User).count() + 1}@example.com",
            phone_number="0712345678",
            hashed_password=security.hash_password(password),
            user_type=user_type,
            is_approved=True,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make


@pytest.fixture
def admin(make_user):
    return make_user(models.UserType.admin, email="admin@example.com", name="Admin")


@pytest.fixture
def customer(make_user):
    return make_user(models.UserType.customer, email="jane@example.com", name="Jane")


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def customer_headers(customer):
    return auth_headers(customer)


@pytest.fixture
def product(db, admin):
    p = models.Product(
        name="City Bike",
        description="Pedal assist commuter",
        price=1500.0,
        category=models.ProductCategory.bike,
        stock_quantity=10,
        image_url="https://res.cloudinary.com/demo/image/upload/v1/products/bike.jpg",
        cloudinary_id="products/bike",
        supplier_id=admin.id,
    )
    db.add(p)
    db.commit()
    db.refresh(p)
    return p


@pytest.fixture
def address(db, customer):
    a = models.UserAddress(
        county="Nairobi", sub_county="Westlands", phone_number="0712345678",
        postal_code="00100", user_id=customer.id,
    )
    db.add(a)
    db.commit()
    db.refresh(a)
    return a
