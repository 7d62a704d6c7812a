"""
Category Service - validation-before-mutation around the category repository

Name uniqueness is checked up front (case-insensitive) for a clear error,
but the unique index on lower(name) is what actually guarantees it; a lost
race surfaces as IntegrityError and is reported as the same ConflictError.
"""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError

from app.domain import Category
from app.errors import ConflictError, NotFoundError
from app.repositories.base import CategoryRepository

logger = logging.getLogger(__name__)

DUPLICATE_NAME_MESSAGE = "Category with this name already exists"
UPDATABLE_FIELDS = ("name", "description")


class CategoryService:
    """Service for category operations"""

    def __init__(self, category_repository: CategoryRepository):
        self.category_repository = category_repository

    def create(self, name: str, description: Optional[str] = None) -> Category:
        if self.category_repository.find_by_name(name):
            logger.warning(f"Category create rejected, name already taken: {name}")
            raise ConflictError(DUPLICATE_NAME_MESSAGE)

        category = Category.create(name, description)
        try:
            saved = self.category_repository.create(category)
        except IntegrityError:
            logger.warning(f"Category create lost a race on name: {name}")
            raise ConflictError(DUPLICATE_NAME_MESSAGE) from None

        logger.info(f"Category created: id={saved.id} name={saved.name}")
        return saved

    def find_all(self) -> List[Category]:
        return self.category_repository.find_all()

    def find_one(self, category_id: int) -> Category:
        category = self.category_repository.find_by_id(category_id)
        if not category:
            raise NotFoundError(f"Category with ID {category_id} not found")
        return category

    def update(self, category_id: int, changes: Dict[str, Any]) -> Category:
        """
        Apply a partial update. Renaming to a name held by another category
        is a conflict; keeping (or re-casing) the category's own name is not.
        """
        existing = self.find_one(category_id)
        changes = {key: value for key, value in changes.items() if key in UPDATABLE_FIELDS}

        if changes.get("name") is not None:
            same_name = self.category_repository.find_by_name(changes["name"])
            if same_name and same_name.id != category_id:
                logger.warning(f"Category {category_id} rename rejected, name already taken: {changes['name']}")
                raise ConflictError(DUPLICATE_NAME_MESSAGE)
        else:
            changes.pop("name", None)

        try:
            updated = self.category_repository.update(existing.with_changes(**changes))
        except IntegrityError:
            raise ConflictError(DUPLICATE_NAME_MESSAGE) from None

        if not updated:
            raise NotFoundError(f"Category with ID {category_id} not found")
        return updated

    def remove(self, category_id: int) -> None:
        """Logically delete a category. Its movies keep pointing at it."""
        self.find_one(category_id)

        if not self.category_repository.delete(category_id):
            raise ConflictError("Unable to delete category")
        logger.info(f"Category deactivated: id={category_id}")

    def get_stats(self) -> Dict[str, int]:
        return {"total": self.category_repository.count()}
