"""
Tests specific to the SQL storage backend.
"""

import pytest

from core.exceptions import TransactionConflictError
from repositories.sql_storage import SqlStorage


@pytest.mark.unit
class TestSqlStorage:
    """Constraint mapping and lifecycle."""

    async def test_duplicate_vote_pair_is_a_conflict(self, sql_storage: SqlStorage, make_user) -> None:
        """UNIQUE(user_id, topic_id) violations surface as TransactionConflictError."""
        voter = await make_user(sql_storage)
        async with sql_storage.session(write=True) as store:
            topic = await store.add_topic("Best season?", None, voter.id, None)
            winter = await store.add_option(topic.id, "Winter")
            summer = await store.add_option(topic.id, "Summer")
            await store.add_vote(voter.id, winter.id, topic.id)

        with pytest.raises(TransactionConflictError):
            async with sql_storage.session(write=True) as store:
                await store.add_vote(voter.id, summer.id, topic.id)

        async with sql_storage.session() as store:
            votes = await store.list_votes(topic.id)
        assert [v.option_id for v in votes] == [winter.id]

    async def test_duplicate_username_ignoring_case_is_a_conflict(self, sql_storage: SqlStorage, make_user) -> None:
        await make_user(sql_storage, "alice")
        with pytest.raises(TransactionConflictError):
            await make_user(sql_storage, "ALICE", email="other@example.com")

    async def test_session_before_init_raises(self, tmp_path) -> None:
        storage = SqlStorage(f"sqlite+aiosqlite:///{tmp_path / 'unused.db'}")
        with pytest.raises(RuntimeError):
            async with storage.session():
                pass

    async def test_reinit_keeps_existing_rows(self, tmp_path, make_user) -> None:
        """Tables are created only when missing."""
        url = f"sqlite+aiosqlite:///{tmp_path / 'persist.db'}"
        first = SqlStorage(url)
        await first.init()
        user = await make_user(first)
        await first.close()

        second = SqlStorage(url)
        await second.init()
        async with second.session() as store:
            assert (await store.get_user(user.id)).username == "alice"
        await second.close()
