"""Keeps Category.count equal to the number of products pointing at it."""

import structlog
from sqlalchemy import case
from sqlalchemy.orm import Session

from backoffice.domain.models.category import Category
from backoffice.domain.models.product import Product

logger = structlog.get_logger(__name__)


class CategoryCounter:
    """Adjusts counts inside the caller's transaction.

    Each adjustment is a single ``UPDATE ... SET count = count + n`` so
    concurrent product writes cannot lose an increment. The caller commits.
    """

    def __init__(self, db: Session):
        self.db = db

    def adjust(self, category_id: str, delta: int) -> None:
        new_count = Category.count + delta
        updated = (
            self.db.query(Category)
            .filter(Category.id == category_id)
            .update({Category.count: case((new_count < 0, 0), else_=new_count)}, synchronize_session=False)
        )
        if not updated:
            logger.warning("Counter target missing", category_id=category_id, delta=delta)

    def increment(self, category_id: str) -> None:
        self.adjust(category_id, 1)

    def decrement(self, category_id: str) -> None:
        self.adjust(category_id, -1)

    def move(self, old_category_id: str, new_category_id: str) -> None:
        if old_category_id == new_category_id:
            return
        self.decrement(old_category_id)
        self.increment(new_category_id)

    def live_count(self, category_id: str) -> int:
        """The authoritative number the counter is supposed to match."""
        return self.db.query(Product).filter(Product.category_id == category_id).count()
