from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.db import Base


class ProductModel(Base):
    """A concrete model (variant line) of a product, e.g. "Pro 14 inch"."""

    __tablename__ = "product_models"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    product_id: Mapped[int] = mapped_column(ForeignKey("products.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String(150))
    sku: Mapped[str | None] = mapped_column(String(64), nullable=True)

    product = relationship("Product", back_populates="models")
