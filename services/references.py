import logging
from typing import Sequence

from sqlalchemy.orm import Session, selectinload

from core.exceptions import NotFoundError
from models.reference import Reference, ReferenceProduct

logger = logging.getLogger(__name__)


class ReferenceService:
    """Reads and prunes product references."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, reference_id: int) -> Reference:
        reference = (
            self.db.query(Reference)
            .options(selectinload(Reference.reference_products))
            .filter(Reference.id == reference_id)
            .one_or_none()
        )
        if reference is None:
            raise NotFoundError("Reference", reference_id)
        return reference

    def delete_reference_products(self, links: Sequence[ReferenceProduct]) -> int:
        """
        Delete the given reference links in their own transaction.

        Args:
            links: ReferenceProduct rows previously loaded in this session

        Returns:
            Number of links deleted
        """
        if not links:
            return 0

        try:
            for link in links:
                self.db.delete(link)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        # Loaded references still list the deleted links until reloaded
        self.db.expire_all()
        logger.info("Deleted %d reference link(s): %s", len(links), [link.id for link in links])
        return len(links)
