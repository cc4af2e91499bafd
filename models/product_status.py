from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from core.db import Base


class ProductStatus(Base):
    __tablename__ = "product_statuses"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(50), unique=True)  # draft, active, discontinued
