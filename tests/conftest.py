from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import models  # noqa: F401
from core.db import Base, get_db
from main import app
from models import (
    Brand,
    Category,
    Coupon,
    Department,
    Option,
    Product,
    ProductDiscount,
    ProductModel,
    ProductStatus,
    ProductUi,
    ProductUiFile,
    Reference,
    ReferenceProduct,
    Stock,
)
from services.file_storage import FileStorage, get_file_storage


@pytest.fixture()
def db():
    """Create a fresh database for each test."""
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _fk_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)
    Base.metadata.create_all(bind=engine)

    db_session = TestingSessionLocal()
    yield db_session
    db_session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def storage(tmp_path):
    return FileStorage(tmp_path / "wwwroot")


@pytest.fixture()
def client(db, storage):
    def _get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_file_storage] = lambda: storage
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def product(db):
    """
    Product 1 "Laptop" in categories {1, 2} with one model, option, stock row,
    discount, coupon, a reference (id 5) linking products 9 and 10, and one UI
    attachment (id 7) stored as products/1/old.png.
    """
    db.add_all([
        ProductStatus(id=1, name="active"),
        Brand(id=1, name="Acme"),
        Department(id=1, name="Computers"),
        Category(id=1, name="Laptops"),
        Category(id=2, name="Office"),
        Category(id=3, name="Gaming"),
        Product(id=9, name="USB-C cable", price=9),
        Product(id=10, name="Sleeve", price=25),
    ])
    db.flush()

    laptop = Product(
        id=1,
        name="Laptop",
        description="14 inch",
        price=999,
        status_id=1,
        brand_id=1,
        department_id=1,
    )
    laptop.categories = [db.get(Category, 1), db.get(Category, 2)]
    laptop.models = [ProductModel(id=11, name="Pro", sku="LP-PRO")]
    laptop.options = [Option(id=21, name="Colour", value="Silver")]
    laptop.stock = [Stock(id=31, quantity=4, last_order=datetime(2024, 1, 5, 12, 0))]
    laptop.product_discounts = [ProductDiscount(id=41, percentage=10, valid_from=datetime(2024, 1, 1))]
    laptop.coupons = [Coupon(id=51, code="WELCOME", amount=20)]
    laptop.references = [
        Reference(
            id=5,
            name="Accessories",
            reference_products=[ReferenceProduct(id=61, product_id=9), ReferenceProduct(id=62, product_id=10)],
        )
    ]
    laptop.product_ui = ProductUi(
        id=3,
        layout={"hero": "gallery"},
        product_ui_files=[ProductUiFile(id=7, folder="products/1", filename="old.png", sort_order=0)],
    )
    db.add(laptop)
    db.commit()
    return laptop
