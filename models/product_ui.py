from sqlalchemy import ForeignKey, Integer, JSON, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.db import Base


class ProductUi(Base):
    __tablename__ = "product_uis"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    product_id: Mapped[int] = mapped_column(ForeignKey("products.id", ondelete="CASCADE"), unique=True, index=True)
    layout: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    product = relationship("Product", back_populates="product_ui")
    product_ui_files = relationship(
        "ProductUiFile",
        cascade="all, delete-orphan",
        back_populates="product_ui",
        order_by="ProductUiFile.sort_order",
    )


class ProductUiFile(Base):
    # File content lives on disk under the web root; only the location is stored
    __tablename__ = "product_ui_files"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    product_ui_id: Mapped[int] = mapped_column(ForeignKey("product_uis.id", ondelete="CASCADE"), index=True)
    folder: Mapped[str] = mapped_column(String(255))
    filename: Mapped[str] = mapped_column(String(255))
    sort_order: Mapped[int] = mapped_column(Integer, default=0)

    product_ui = relationship("ProductUi", back_populates="product_ui_files")
