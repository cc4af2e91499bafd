from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.dates import utcnow
from core.db import Base


# Association table for many-to-many relationship between products and categories
product_categories = Table(
    "product_categories",
    Base.metadata,
    Column("product_id", Integer, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", Integer, ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)


class Product(Base):
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    status_id: Mapped[int | None] = mapped_column(ForeignKey("product_statuses.id", ondelete="SET NULL"), nullable=True, index=True)
    brand_id: Mapped[int | None] = mapped_column(ForeignKey("brands.id", ondelete="SET NULL"), nullable=True, index=True)
    department_id: Mapped[int | None] = mapped_column(ForeignKey("departments.id", ondelete="SET NULL"), nullable=True, index=True)
    name: Mapped[str] = mapped_column(String(200), index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[float] = mapped_column(Numeric(12, 2), default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # Server-owned lookups
    status = relationship("ProductStatus")
    brand = relationship("Brand")
    department = relationship("Department")

    categories = relationship("Category", secondary=product_categories, back_populates="products")
    models = relationship("ProductModel", cascade="all, delete-orphan", back_populates="product")
    options = relationship("Option", cascade="all, delete-orphan", back_populates="product")
    stock = relationship("Stock", cascade="all, delete-orphan", back_populates="product")
    product_discounts = relationship("ProductDiscount", cascade="all, delete-orphan", back_populates="product")
    coupons = relationship("Coupon", cascade="all, delete-orphan", back_populates="product")
    product_ui = relationship("ProductUi", uselist=False, cascade="all, delete-orphan", back_populates="product")

    # References this product publishes, and links from other products' references to this one
    references = relationship(
        "Reference", cascade="all, delete-orphan", back_populates="product", foreign_keys="Reference.product_id"
    )
    reference_products = relationship(
        "ReferenceProduct", back_populates="product", foreign_keys="ReferenceProduct.product_id"
    )

    # Managed by the cart and order workflows
    cart_items = relationship("CartItem", back_populates="product")
    order_details = relationship("OrderDetail", back_populates="product")
