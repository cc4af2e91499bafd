from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.db import Base


class Reference(Base):
    """A named group of links from one product to others ("fits with", "see also")."""

    __tablename__ = "product_references"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    product_id: Mapped[int] = mapped_column(ForeignKey("products.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String(150))

    product = relationship("Product", back_populates="references", foreign_keys=[product_id])
    reference_products = relationship("ReferenceProduct", cascade="all, delete-orphan", back_populates="reference")


class ReferenceProduct(Base):
    __tablename__ = "reference_products"
    __table_args__ = (UniqueConstraint("reference_id", "product_id", name="uq_reference_product"),)

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    reference_id: Mapped[int] = mapped_column(ForeignKey("product_references.id", ondelete="CASCADE"), index=True)
    product_id: Mapped[int] = mapped_column(ForeignKey("products.id", ondelete="CASCADE"), index=True)

    reference = relationship("Reference", back_populates="reference_products")
    product = relationship("Product", back_populates="reference_products", foreign_keys=[product_id])
