"""
Pure transformations applied to an incoming product payload before it is
written. Each function returns a new payload and leaves its input untouched.
"""
from typing import Iterable, List, Optional, Sequence

from core.dates import as_utc
from models.reference import Reference, ReferenceProduct
from schemas.product import CategoryIn, ProductUpdate
from schemas.reference import ReferenceIn

# Fields owned by the server or by other workflows (cart, checkout)
SERVER_OWNED_FIELDS = ("status", "brand", "department", "cart_items", "order_details")


def sanitize(payload: ProductUpdate) -> ProductUpdate:
    return payload.model_copy(update={field: None for field in SERVER_OWNED_FIELDS})


def _with_utc(items: Optional[list], *fields: str) -> Optional[list]:
    if not items:
        return items
    return [item.model_copy(update={f: as_utc(getattr(item, f)) for f in fields}) for item in items]


def normalize_timestamps(payload: ProductUpdate) -> ProductUpdate:
    """Tag every stock, discount and coupon timestamp as UTC."""
    return payload.model_copy(update={
        "stock": _with_utc(payload.stock, "last_order", "ordered_last"),
        "product_discounts": _with_utc(payload.product_discounts, "valid_from", "expires"),
        "coupons": _with_utc(payload.coupons, "valid_from", "expires"),
    })


def new_categories(categories: Optional[Sequence[CategoryIn]], existing_ids: Iterable[int]) -> List[CategoryIn]:
    """Categories from the payload the product is not yet a member of."""
    existing = set(existing_ids)
    return [category for category in categories or [] if category.id not in existing]


def unsaved(items: Optional[Sequence]) -> list:
    """Entries that have never been persisted (id unset or 0)."""
    return [item for item in items or [] if not item.id]


def with_incremental_collections(payload: ProductUpdate, existing_category_ids: Iterable[int]) -> ProductUpdate:
    """Reduce categories, models and options to the rows that still need inserting.

    Existing memberships and child rows are left as they are in the database;
    nothing here removes them.
    """
    return payload.model_copy(update={
        "categories": new_categories(payload.categories, existing_category_ids),
        "models": unsaved(payload.models),
        "options": unsaved(payload.options),
    })


def missing_reference_products(submitted: ReferenceIn, stored: Reference) -> List[ReferenceProduct]:
    """Links in the stored reference whose target product is no longer submitted."""
    kept = {link.product_id for link in submitted.reference_products or []}
    return [link for link in stored.reference_products if link.product_id not in kept]
