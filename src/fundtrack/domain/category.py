"""Category domain service for purchase and income categories."""

from typing import Optional

import structlog

from fundtrack.database.base import Database
from fundtrack.domain import aggregates
from fundtrack.domain.cache import ViewState, ViewStateCache
from fundtrack.domain.entities import Category, CategoryKind
from fundtrack.domain.errors import NotFoundError, ValidationError, category_not_found
from fundtrack.domain.payloads import CategoryPatch, NewCategory

logger = structlog.get_logger(__name__)


class CategoryService:
    """Service for managing both category namespaces."""

    def __init__(self, db: Database, view_state: ViewState):
        """Initialize category service.

        Args:
            db: Database instance
            view_state: Session view state holding both category caches
        """
        self.db = db
        self._caches = {
            CategoryKind.PURCHASE: view_state.purchase_categories,
            CategoryKind.INCOME: view_state.income_categories,
        }

    def cache_for(self, kind: CategoryKind) -> ViewStateCache[Category]:
        return self._caches[kind]

    async def load_categories(self, kind: CategoryKind) -> list[Category]:
        """Replace the cached categories of one kind, ordered by name."""
        cache = self.cache_for(kind)
        cache.loading = True
        try:
            categories = await self.db.list_categories(kind)
        finally:
            cache.loading = False
        cache.replace_all(categories)
        return categories

    async def load_all_categories(self) -> None:
        for kind in CategoryKind:
            await self.load_categories(kind)

    def get_category(self, kind: CategoryKind, category_id: int) -> Optional[Category]:
        return self.cache_for(kind).get(category_id)

    def active_categories(self, kind: CategoryKind) -> list[Category]:
        return aggregates.active_categories(self.cache_for(kind).items)

    async def create_category(self, kind: CategoryKind, form: NewCategory) -> Category:
        """Create a category.

        Raises:
            ValidationError: If the name is blank
        """
        if not form.name or not form.name.strip():
            raise ValidationError("Category name is required")

        category = await self.db.create_category(kind, form)
        self.cache_for(kind).append(category)
        logger.info("category_created", kind=kind.value, category_id=category.id, name=category.name)
        return category

    async def update_category(self, kind: CategoryKind, category_id: int, patch: CategoryPatch) -> Category:
        """Apply a partial update to a category."""
        if patch.name is not None and not patch.name.strip():
            raise ValidationError("Category name cannot be empty")

        category = await self.db.update_category(kind, category_id, patch)
        self.cache_for(kind).replace(category)
        return category

    async def toggle_category(self, kind: CategoryKind, category_id: int) -> Category:
        """Flip the active flag of a category.

        The write only succeeds if the stored flag still matches the value
        this session last saw, so two concurrent toggles cannot silently
        cancel each other out.

        Raises:
            NotFoundError: If the category is unknown
            ConflictError: If the flag changed since it was last loaded
        """
        current = self.get_category(kind, category_id)
        if current is None:
            current = await self.db.get_category(kind, category_id)
        if current is None:
            raise NotFoundError(category_not_found(kind.value, category_id))

        category = await self.db.set_category_active(
            kind, category_id, active=not current.active, expected=current.active
        )
        self.cache_for(kind).replace(category)
        logger.info("category_toggled", kind=kind.value, category_id=category_id, active=category.active)
        return category
