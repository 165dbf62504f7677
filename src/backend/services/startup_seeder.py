"""
Startup seeding.

Safe to run on every boot: categories are only inserted when the
collection is empty, and the check and inserts share one write session.
"""

import structlog

from repositories.base import Storage
from schemas.topic import CategoryCreate

logger = structlog.get_logger(__name__)

DEFAULT_CATEGORIES: list[CategoryCreate] = [
    CategoryCreate(name="Politics", description="Political discussions and polls", icon="buildings"),
    CategoryCreate(name="Technology", description="Tech innovations and digital trends", icon="laptop"),
    CategoryCreate(name="Environment", description="Climate and environmental issues", icon="globe"),
    CategoryCreate(name="Health", description="Healthcare and wellness topics", icon="activity"),
    CategoryCreate(name="Education", description="Learning and educational reforms", icon="graduation-cap"),
    CategoryCreate(name="Economy", description="Economic policies and financial matters", icon="dollar-sign"),
    CategoryCreate(name="Society", description="Social issues and community concerns", icon="users"),
    CategoryCreate(name="Culture", description="Arts, entertainment and cultural topics", icon="palette"),
]


async def seed_categories(storage: Storage) -> int:
    """Insert the default categories if none exist. Returns how many were added."""
    async with storage.session(write=True) as store:
        if await store.count_categories() > 0:
            logger.debug("category_seed_skipped")
            return 0
        for category in DEFAULT_CATEGORIES:
            await store.add_category(category)

    logger.info("categories_seeded", count=len(DEFAULT_CATEGORIES))
    return len(DEFAULT_CATEGORIES)


async def seed_all(storage: Storage) -> None:
    """Seed every kind of reference data."""
    await seed_categories(storage)
