"""Category domain service."""

import logging
from typing import Optional, Sequence

from billtrack.database.base import Database
from billtrack.domain.entities import Category as CategoryEntity
from billtrack.domain.errors import (
    ConflictError,
    NotFoundError,
    category_not_found,
    duplicate_category_name,
)

logger = logging.getLogger(__name__)

# Default category set as (name, description) pairs
DEFAULT_CATEGORIES: tuple[tuple[str, str], ...] = (
    ("Rent/Facilities", "Rent and upkeep of facilities"),
    ("Equipment", "Purchase and maintenance of equipment"),
    ("Services", "Assorted service providers"),
    ("Materials", "Office materials and consumables"),
    ("Sales", "Sales of products or services"),
)


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(self, name: str, description: Optional[str] = None) -> int:
        """Create a category.

        Args:
            name: Category name, unique
            description: Optional description

        Returns:
            Category ID

        Raises:
            ConflictError: If a category with the same name exists
        """
        if self.db.get_category_by_name(name) is not None:
            raise ConflictError(duplicate_category_name(name))
        return self.db.create_category(name=name, description=description)

    def seed_default_categories(
        self, defaults: Sequence[tuple[str, Optional[str]]] = DEFAULT_CATEGORIES
    ) -> list[int]:
        """Create the default categories that do not exist yet.

        Meant to run once when a database is initialized. Categories whose
        name already exists are left untouched.

        Args:
            defaults: (name, description) pairs to seed

        Returns:
            IDs of the categories created
        """
        created = []
        for name, description in defaults:
            if self.db.get_category_by_name(name) is not None:
                continue
            created.append(self.db.create_category(name=name, description=description))
        logger.info("Seeded %d default categories", len(created))
        return created

    def get_category(self, category_id: int) -> Optional[CategoryEntity]:
        """Get category by ID.

        Args:
            category_id: Category ID

        Returns:
            Category entity or None if not found
        """
        return self.db.get_category(category_id)

    def get_category_by_name(self, name: str) -> Optional[CategoryEntity]:
        """Get category by name."""
        return self.db.get_category_by_name(name)

    def list_categories(self) -> list[CategoryEntity]:
        """List categories in creation order."""
        return self.db.list_categories()

    def update_category(
        self,
        category_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> CategoryEntity:
        """Rename a category or change its description.

        Raises:
            NotFoundError: If the category doesn't exist
            ConflictError: If the new name belongs to another category
        """
        if self.db.get_category(category_id) is None:
            raise NotFoundError(category_not_found(category_id))

        fields = {}
        if name is not None:
            existing = self.db.get_category_by_name(name)
            if existing is not None and existing.id != category_id:
                raise ConflictError(duplicate_category_name(name))
            fields["name"] = name
        if description is not None:
            fields["description"] = description

        if fields:
            self.db.update_category(category_id, **fields)
        return self.db.get_category(category_id)

    def delete_category(self, category_id: int) -> None:
        """Delete a category.

        Invoices that reference the category are kept and drop out of joined
        views.

        Raises:
            NotFoundError: If the category doesn't exist
        """
        if self.db.get_category(category_id) is None:
            raise NotFoundError(category_not_found(category_id))
        self.db.delete_category(category_id)
