import logging
from typing import List, Optional, Tuple

from sqlalchemy import update
from sqlalchemy.orm import Session, selectinload

from core.dates import utcnow
from core.exceptions import BadRequestError, NotFoundError
from models.category import Category
from models.coupon import Coupon
from models.option import Option
from models.product import Product
from models.product_discount import ProductDiscount
from models.product_model import ProductModel
from models.product_ui import ProductUi, ProductUiFile
from models.reference import Reference, ReferenceProduct
from models.stock import Stock
from schemas.product import ProductOut, ProductUiIn, ProductUpdate
from services import product_payload
from services.file_storage import FileStorage, file_storage
from services.references import ReferenceService

logger = logging.getLogger(__name__)


class ProductUpdateHandler:
    """
    Replace a stored product with the representation submitted by the admin UI.

    The database write and the attachment files written afterwards are not one
    transaction: once the commit succeeded, a failing file operation leaves the
    row pointing at a file that may be missing.
    """

    def __init__(
        self,
        db: Session,
        references: Optional[ReferenceService] = None,
        storage: Optional[FileStorage] = None,
    ):
        self.db = db
        self.references = references or ReferenceService(db)
        self.storage = storage or file_storage

    def update(self, payload: ProductUpdate) -> Product:
        existing = self._load_snapshot(payload.id)
        logger.info("Updating product %s", payload.id)

        cleaned = product_payload.sanitize(payload)
        cleaned = product_payload.normalize_timestamps(cleaned)
        self._check_file_locations(cleaned.product_ui)
        self._check_references(cleaned, existing)

        self._prune_reference_products(cleaned)

        cleaned = product_payload.with_incremental_collections(
            cleaned, (category.id for category in existing.categories)
        )

        product, affected = self._persist(cleaned)
        if affected <= 0:
            raise BadRequestError(f"Product/{payload.id} was not updated")

        self._sync_files(cleaned.product_ui, existing)

        self.db.refresh(product)
        return product

    def _load_snapshot(self, product_id: int) -> ProductOut:
        product = (
            self.db.query(Product)
            .options(
                selectinload(Product.categories),
                selectinload(Product.models),
                selectinload(Product.product_ui).selectinload(ProductUi.product_ui_files),
                selectinload(Product.references).selectinload(Reference.reference_products),
                selectinload(Product.reference_products),
            )
            .filter(Product.id == product_id)
            .one_or_none()
        )
        if product is None:
            raise NotFoundError("Product", product_id)
        return ProductOut.model_validate(product)

    def _check_file_locations(self, product_ui: Optional[ProductUiIn]) -> None:
        if product_ui is None:
            return
        for ui_file in product_ui.product_ui_files:
            if ui_file.form_content is not None:
                self.storage.resolve(ui_file.folder, ui_file.filename)

    def _check_references(self, payload: ProductUpdate, existing: ProductOut) -> None:
        """Reject references and links that are not this product's before anything is deleted."""
        owned = {reference.id: reference for reference in existing.references}
        for reference in payload.references or []:
            if not reference.id:
                continue
            stored = owned.get(reference.id)
            if stored is None:
                raise NotFoundError("Reference", reference.id)
            link_ids = {link.id for link in stored.reference_products}
            for link in reference.reference_products:
                if link.id and link.id not in link_ids:
                    raise NotFoundError("ReferenceProduct", link.id)

    def _prune_reference_products(self, payload: ProductUpdate) -> None:
        # Only references still present in the payload are reconciled; links of
        # references dropped from the payload entirely are left in place.
        stale: List[ReferenceProduct] = []
        for reference in payload.references or []:
            if reference.id > 0:
                stored = self.references.get_by_id(reference.id)
                stale.extend(product_payload.missing_reference_products(reference, stored))

        self.references.delete_reference_products(stale)

    def _persist(self, payload: ProductUpdate) -> Tuple[Optional[Product], int]:
        """Write the product graph and commit; returns the product and the affected row count."""
        db = self.db
        try:
            result = db.execute(
                update(Product)
                .where(Product.id == payload.id)
                .values(
                    name=payload.name,
                    description=payload.description,
                    price=payload.price,
                    status_id=payload.status_id,
                    brand_id=payload.brand_id,
                    department_id=payload.department_id,
                    updated_at=utcnow(),
                )
            )
            affected = result.rowcount or 0

            # Nothing to attach children to once the row is gone
            product = db.get(Product, payload.id) if affected else None
            if product is not None:
                with db.no_autoflush:
                    affected += self._add_categories(product, payload)
                    self._apply_children(product, payload)
                    affected += self._pending_child_writes()
            db.commit()
        except Exception:
            db.rollback()
            raise
        return product, affected

    def _pending_child_writes(self) -> int:
        # The root row is counted by the UPDATE statement itself
        modified = [obj for obj in self.db.dirty if not isinstance(obj, Product) and self.db.is_modified(obj)]
        return len(self.db.new) + len(modified) + len(self.db.deleted)

    def _add_categories(self, product: Product, payload: ProductUpdate) -> int:
        added = 0
        for item in payload.categories or []:
            if item.id:
                category = self.db.get(Category, item.id)
                if category is None:
                    raise NotFoundError("Category", item.id)
                if item.name:
                    category.name = item.name
            else:
                category = Category(name=item.name or "")
            product.categories.append(category)
            added += 1
        return added

    def _apply_children(self, product: Product, payload: ProductUpdate) -> None:
        for item in payload.models or []:
            product.models.append(ProductModel(**item.model_dump(exclude={"id"})))
        for item in payload.options or []:
            product.options.append(Option(**item.model_dump(exclude={"id"})))

        self._upsert(product.stock, Stock, payload.stock)
        self._upsert(product.product_discounts, ProductDiscount, payload.product_discounts)
        self._upsert(product.coupons, Coupon, payload.coupons)

        for item in payload.references or []:
            reference = self._upsert_one(product.references, Reference, item, exclude={"reference_products"})
            for link in item.reference_products:
                if link.id:
                    self._upsert_one(reference.reference_products, ReferenceProduct, link, exclude={"reference_id"})
                elif not any(current.product_id == link.product_id for current in reference.reference_products):
                    reference.reference_products.append(ReferenceProduct(product_id=link.product_id))

        if payload.product_ui is not None:
            if product.product_ui is None:
                product.product_ui = ProductUi()
            product.product_ui.layout = payload.product_ui.layout
            self._upsert(
                product.product_ui.product_ui_files,
                ProductUiFile,
                payload.product_ui.product_ui_files,
                exclude={"form_content"},
            )

    def _upsert(self, collection: list, model, items: Optional[list], exclude: Optional[set] = None) -> None:
        for item in items or []:
            self._upsert_one(collection, model, item, exclude=exclude)

    def _upsert_one(self, collection: list, model, item, exclude: Optional[set] = None):
        """Update the row with the item's id in ``collection``, or append a new one when the id is unset."""
        data = item.model_dump(exclude={"id"} | (exclude or set()))
        if not item.id:
            row = model(**data)
            collection.append(row)
            return row

        row = next((current for current in collection if current.id == item.id), None)
        if row is None:
            raise NotFoundError(model.__name__, item.id)
        for key, value in data.items():
            setattr(row, key, value)
        return row

    def _sync_files(self, product_ui: Optional[ProductUiIn], existing: ProductOut) -> None:
        if product_ui is None:
            return

        previous = {}
        if existing.product_ui is not None:
            previous = {ui_file.id: ui_file for ui_file in existing.product_ui.product_ui_files}

        for ui_file in product_ui.product_ui_files:
            if ui_file.form_content is None:
                continue

            path = self.storage.write_bytes(ui_file.folder, ui_file.filename, ui_file.form_content)
            logger.info("Stored attachment %s for product %s", path, existing.id)

            old = previous.get(ui_file.id) if ui_file.id else None
            if old is None:
                continue
            if self.storage.resolve(old.folder, old.filename) == path:
                continue
            if self.storage.delete_if_exists(old.folder, old.filename):
                logger.info("Removed replaced attachment %s/%s", old.folder, old.filename)
