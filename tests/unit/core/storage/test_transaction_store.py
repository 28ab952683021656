"""
TransactionStore 테스트

staged 변경 / save 커밋 / 롤백 / 조회 정렬
"""

import sqlite3
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from core.storage.transaction_store import TransactionStore


class TestTransactionStoreMutations:
    """create / update / delete + save"""

    @pytest.mark.asyncio
    async def test_create_and_save(self, transaction_store: TransactionStore, make_txn) -> None:
        txn = make_txn("100.50", "25.125", day=3)

        await transaction_store.create(txn)
        assert await transaction_store.save() is True

        loaded = await transaction_store.get(txn.id)
        assert loaded is not None
        assert loaded.first_amount == Decimal("100.50")
        assert loaded.second_amount == Decimal("25.125")
        assert loaded.date == txn.date

    @pytest.mark.asyncio
    async def test_discard_drops_staged(self, transaction_store: TransactionStore, make_txn) -> None:
        """discard 시 커밋 전 변경 폐기"""
        txn = make_txn("100")

        await transaction_store.create(txn)
        await transaction_store.discard()

        assert await transaction_store.exists(txn.id) is False

    @pytest.mark.asyncio
    async def test_update(self, transaction_store: TransactionStore, make_txn) -> None:
        txn = make_txn("100", "25")
        await transaction_store.create(txn)
        await transaction_store.save()

        txn.first_amount = Decimal("200")
        txn.category = "Transport"
        await transaction_store.update(txn)
        await transaction_store.save()

        loaded = await transaction_store.get(txn.id)
        assert loaded.first_amount == Decimal("200")
        assert loaded.category == "Transport"

    @pytest.mark.asyncio
    async def test_delete(self, transaction_store: TransactionStore, make_txn) -> None:
        txn = make_txn("100")
        await transaction_store.create(txn)
        await transaction_store.save()

        await transaction_store.delete(txn)
        await transaction_store.save()

        assert await transaction_store.get(txn.id) is None

    @pytest.mark.asyncio
    async def test_reassign_category(self, transaction_store: TransactionStore, make_txn) -> None:
        for category in ("Electronics", "Electronics", "Food"):
            await transaction_store.create(make_txn("1", category=category))
        await transaction_store.save()

        moved = await transaction_store.reassign_category("Electronics", "Other")
        await transaction_store.save()

        assert moved == 2
        assert await transaction_store.count(lambda t: t.category == "Other") == 2

    @pytest.mark.asyncio
    async def test_delete_by_category(self, transaction_store: TransactionStore, make_txn) -> None:
        await transaction_store.create(make_txn("1", category="API"))
        await transaction_store.create(make_txn("2", category="Food"))
        await transaction_store.save()

        removed = await transaction_store.delete_by_category("API")
        await transaction_store.save()

        assert removed == 1
        assert await transaction_store.count() == 1

    @pytest.mark.asyncio
    async def test_duplicate_id_raises(self, transaction_store: TransactionStore, make_txn) -> None:
        txn = make_txn("1")
        await transaction_store.create(txn)

        with pytest.raises(sqlite3.IntegrityError):
            await transaction_store.create(txn)

    @pytest.mark.asyncio
    async def test_save_failure_rolls_back(self, db, make_txn) -> None:
        """커밋 실패 시 False + 롤백"""
        store = TransactionStore(db)
        txn = make_txn("1")
        await store.create(txn)

        db.commit = AsyncMock(side_effect=sqlite3.OperationalError("disk I/O error"))

        assert await store.save() is False
        assert await store.exists(txn.id) is False


class TestTransactionStoreQuery:
    """query / count / all"""

    @pytest.mark.asyncio
    async def test_sort_by_date_descending(self, transaction_store, make_txn) -> None:
        for day in (3, 1, 2):
            await transaction_store.create(make_txn(str(day), day=day))
        await transaction_store.save()

        result = await transaction_store.query()

        assert [txn.date.day for txn in result] == [3, 2, 1]

    @pytest.mark.asyncio
    async def test_sort_by_amount_is_numeric(self, transaction_store, make_txn) -> None:
        """TEXT 저장이지만 숫자 기준 정렬"""
        for amount in ("9", "100", "25.5"):
            await transaction_store.create(make_txn(amount))
        await transaction_store.save()

        result = await transaction_store.query(sort_by="first_amount", descending=False)

        assert [str(txn.first_amount) for txn in result] == ["9", "25.5", "100"]

    @pytest.mark.asyncio
    async def test_sort_by_category_uses_other_for_missing(self, transaction_store, make_txn) -> None:
        await transaction_store.create(make_txn("1", category="Transport"))
        await transaction_store.create(make_txn("2", category=None))
        await transaction_store.create(make_txn("3", category="food"))
        await transaction_store.save()

        result = await transaction_store.query(sort_by="category", descending=False)

        assert [txn.valid_category for txn in result] == ["food", "Other", "Transport"]

    @pytest.mark.asyncio
    async def test_equal_keys_keep_insertion_order(self, transaction_store, make_txn) -> None:
        first = make_txn("1", day=5)
        second = make_txn("2", day=5)
        await transaction_store.create(first)
        await transaction_store.create(second)
        await transaction_store.save()

        result = await transaction_store.query(descending=False)

        assert [txn.id for txn in result] == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_date_range_and_category(self, transaction_store, make_txn) -> None:
        for day, category in ((1, "Food"), (10, "Food"), (10, "Transport"), (20, "Food")):
            await transaction_store.create(make_txn("1", day=day, category=category))
        await transaction_store.save()

        result = await transaction_store.query(
            start=datetime(2026, 2, 5, tzinfo=timezone.utc),
            end=datetime(2026, 2, 20, tzinfo=timezone.utc),
            category="Food",
        )

        assert len(result) == 1
        assert result[0].date.day == 10

    @pytest.mark.asyncio
    async def test_predicate(self, transaction_store, make_txn) -> None:
        await transaction_store.create(make_txn("1"))
        await transaction_store.create(make_txn("500"))
        await transaction_store.save()

        result = await transaction_store.query(lambda t: t.first_amount > 100)

        assert len(result) == 1
        assert await transaction_store.count(lambda t: t.first_amount > 100) == 1

    @pytest.mark.asyncio
    async def test_invalid_sort_field(self, transaction_store) -> None:
        with pytest.raises(ValueError):
            await transaction_store.query(sort_by="comment; DROP TABLE transactions")

    @pytest.mark.asyncio
    async def test_all_ascending(self, transaction_store, make_txn) -> None:
        for day in (2, 1):
            await transaction_store.create(make_txn("1", day=day))
        await transaction_store.save()

        assert [txn.date.day for txn in await transaction_store.all()] == [1, 2]
