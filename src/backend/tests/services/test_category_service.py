"""
Tests for category lookups.
"""

import pytest

from core.exceptions import NotFoundError
from services.category_service import CategoryService


@pytest.mark.unit
class TestCategoryService:
    """Category reads on every backend."""

    async def test_list_categories(self, seeded_storage) -> None:
        categories = await CategoryService(seeded_storage).list_categories()
        assert len(categories) == 8

    async def test_get_category(self, seeded_storage) -> None:
        category = await CategoryService(seeded_storage).get_category(2)
        assert category.name == "Technology"
        assert category.icon == "laptop"

    async def test_get_unknown_category(self, seeded_storage) -> None:
        with pytest.raises(NotFoundError):
            await CategoryService(seeded_storage).get_category(99)
