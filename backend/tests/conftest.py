"""
Shared fixtures: an in-memory SQLite database per test, a TestClient wired to
it, and seed rows for the workshop domain.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_FORMAT", "standard")
os.environ.setdefault("ENABLE_REQUEST_LOGGING", "false")

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app import models  # noqa: F401
from app.database import Base, get_db
from app.main import app
from app.models.contact import Contact
from app.models.material import Material
from app.models.order import Order
from app.models.product import Product

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db):
    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    app.state.tailor_cache.clear()
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def make_material(db):
    def _make(**overrides) -> Material:
        fields = {
            "name": "Cotton Drill",
            "code": f"MAT-{db.query(Material).count() + 1:03d}",
            "unit": "m",
            "qty_on_hand": Decimal("100"),
            "safety_stock": Decimal("20"),
        }
        fields.update(overrides)
        material = Material(**fields)
        db.add(material)
        db.commit()
        db.refresh(material)
        return material

    return _make


@pytest.fixture()
def make_product(db):
    def _make(material: Material = None, **overrides) -> Product:
        fields = {
            "name": "Work Shirt",
            "unit": "pcs",
            "material_id": material.id if material else None,
        }
        fields.update(overrides)
        product = Product(**fields)
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return _make


@pytest.fixture()
def material(make_material) -> Material:
    """Material 3 from the workshop example: 15 m on hand, safety level 10 m."""
    return make_material(
        id=3,
        name="Drill Fabric",
        code="FAB-DRILL",
        unit="m",
        qty_on_hand=Decimal("15"),
        safety_stock=Decimal("10"),
    )


@pytest.fixture()
def product(make_product, material) -> Product:
    return make_product(material, id=7, name="Chef Jacket", code="PRD-007")


@pytest.fixture()
def order(db) -> Order:
    row = Order(
        order_number="ORD-000001",
        status="created",
        priority="medium",
        due_date=date(2026, 11, 30),
        target_pcs=0,
        completed_pcs=0,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


@pytest.fixture()
def tailor(db) -> Contact:
    contact = Contact(name="Budi Santoso", type="tailor", whatsapp_phone="+6281200000001")
    db.add(contact)
    db.commit()
    db.refresh(contact)
    return contact
