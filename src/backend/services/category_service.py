"""
Category lookups. Categories are reference data and never change at runtime.
"""

from core.exceptions import NotFoundError
from repositories.base import Storage
from schemas.topic import Category


class CategoryService:
    """Read access to categories."""

    def __init__(self, storage: Storage):
        self.storage = storage

    async def list_categories(self) -> list[Category]:
        async with self.storage.session() as store:
            return await store.list_categories()

    async def get_category(self, category_id: int) -> Category:
        async with self.storage.session() as store:
            category = await store.get_category(category_id)
        if category is None:
            raise NotFoundError("Category not found")
        return category
