"""
StatementImporter 통합 테스트

부호 분류, 환율 추정/대체, 멱등성, 잘못된 레코드 처리
"""

import sqlite3
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from adapters.mock.bank_client import MockBankFeedClient
from adapters.monobank.models import StatementItem
from adapters.monobank.rest_client import MonobankApiError
from core.ledger.importer import ImportResult, StatementImporter
from core.utils.dedup import make_import_id
from core.utils.timezone import to_timestamp

FEB_3 = to_timestamp(datetime(2026, 2, 3, tzinfo=timezone.utc))
FEB_4 = to_timestamp(datetime(2026, 2, 4, tzinfo=timezone.utc))


@pytest.fixture
def importer(transaction_store, currency_manager) -> StatementImporter:
    return StatementImporter(transaction_store, currency_manager)


def _record(record_id: str, amount: int, time: int = FEB_3, **extra) -> dict:
    return {"id": record_id, "time": time, "amount": amount, **extra}


class TestBuildTransaction:
    """build_transaction 테스트"""

    def test_debit_becomes_api_with_abs_amounts(self, importer) -> None:
        item = StatementItem.from_api(_record("x", -95000, operationAmount=-2400, description="Shop"))

        txn = importer.build_transaction(item, [])

        assert txn.category == "API"
        assert txn.first_amount == Decimal("950")
        assert txn.second_amount == Decimal("24")
        assert txn.first_currency_code == "UAH"
        assert txn.second_currency_code == "PLN"
        assert txn.comment == "Shop"
        assert txn.id == make_import_id("x")

    def test_credit_becomes_replenishment(self, importer) -> None:
        item = StatementItem.from_api(_record("y", 500000))

        txn = importer.build_transaction(item, [])

        assert txn.category == "Replenishment"
        assert txn.first_amount == Decimal("5000")

    def test_uses_nearest_rate_when_available(self, importer, make_txn) -> None:
        history = [make_txn("100", "25", day=2)]
        item = StatementItem.from_api(_record("z", -40000, operationAmount=-1))

        txn = importer.build_transaction(item, history)

        assert txn.second_amount == Decimal("100")

    def test_date_from_unix_time(self, importer) -> None:
        txn = importer.build_transaction(StatementItem.from_api(_record("d", -100)), [])

        assert txn.date == datetime(2026, 2, 3, tzinfo=timezone.utc)


class TestImportRecords:
    """import_records 테스트"""

    @pytest.mark.asyncio
    async def test_import_and_reimport_is_idempotent(self, importer, transaction_store) -> None:
        records = [_record("a", -100), _record("b", 200, time=FEB_4)]

        first = await importer.import_records(records)
        second = await importer.import_records(records)

        assert (first.imported, first.skipped_duplicates) == (2, 0)
        assert (second.imported, second.skipped_duplicates) == (0, 2)
        assert await transaction_store.count() == 2

    @pytest.mark.asyncio
    async def test_duplicates_within_batch(self, importer, transaction_store) -> None:
        result = await importer.import_records([_record("a", -100), _record("a", -100)])

        assert result.imported == 1
        assert result.skipped_duplicates == 1

    @pytest.mark.asyncio
    async def test_malformed_records_skipped(self, importer, transaction_store) -> None:
        records = [
            _record("ok", -100),
            {"time": FEB_3, "amount": -1},  # id 없음
            _record("bad-amount", "abc"),
            _record("bad-time", -1, time=None),
        ]

        result = await importer.import_records(records)

        assert result.ok is True
        assert result.imported == 1
        assert result.rejected == 3
        assert await transaction_store.count() == 1

    @pytest.mark.asyncio
    async def test_rate_uses_pre_import_history_only(self, importer, transaction_store, make_txn) -> None:
        """같은 배치의 거래는 서로의 환율 근거가 되지 않음"""
        result = await importer.import_records(
            [_record("a", -10000, operationAmount=-2500), _record("b", -20000, operationAmount=-1000)]
        )

        assert result.imported == 2
        b = await transaction_store.get(make_import_id("b"))
        assert b.second_amount == Decimal("10")

    @pytest.mark.asyncio
    async def test_accepts_statement_items(self, importer) -> None:
        item = StatementItem.from_api(_record("s", -100))

        result = await importer.import_records([item])

        assert result.imported == 1

    @pytest.mark.asyncio
    async def test_save_failure(self, importer, db, transaction_store) -> None:
        db.commit = AsyncMock(side_effect=sqlite3.OperationalError("locked"))

        result = await importer.import_records([_record("a", -100)])

        assert result.ok is False
        assert result.failed_at == "storage"
        assert await transaction_store.count() == 0

    @pytest.mark.asyncio
    async def test_empty_batch(self, importer) -> None:
        result = await importer.import_records([])

        assert result == ImportResult()


class TestFetchAndImport:
    """fetch_and_import 테스트"""

    @pytest.mark.asyncio
    async def test_fetch_and_import(self, importer, transaction_store) -> None:
        client = MockBankFeedClient()
        client.add_record("a", time=FEB_3, amount=-100)

        result = await importer.fetch_and_import(
            client,
            datetime(2026, 2, 1, tzinfo=timezone.utc),
            datetime(2026, 2, 28, tzinfo=timezone.utc),
        )

        assert result.imported == 1

    @pytest.mark.asyncio
    async def test_feed_error_leaves_store_untouched(self, importer, transaction_store) -> None:
        client = MockBankFeedClient()
        client.add_record("a", time=FEB_3, amount=-100)
        client.set_fail_next(MonobankApiError("Unknown 'X-Token'", 403))

        result = await importer.fetch_and_import(client)

        assert result.ok is False
        assert result.retryable is False
        assert result.failed_at == "feed"
        assert await transaction_store.count() == 0

    @pytest.mark.asyncio
    async def test_default_range_is_current_month(self, importer) -> None:
        client = MockBankFeedClient()

        await importer.fetch_and_import(client)

        from_ts, to_ts, _ = client.state.calls[0]
        start = datetime.fromtimestamp(from_ts, tz=timezone.utc)
        assert start.day == 1
        assert (start.hour, start.minute) == (0, 0)
        assert to_ts >= from_ts


class TestDeleteImported:
    @pytest.mark.asyncio
    async def test_removes_only_api_transactions(self, importer, transaction_store, make_txn) -> None:
        await importer.import_records([_record("a", -100), _record("b", 500)])
        await transaction_store.create(make_txn("10", category="Food"))
        await transaction_store.save()

        removed = await importer.delete_imported()

        assert removed == 1
        categories = {txn.category for txn in await transaction_store.all()}
        assert categories == {"Replenishment", "Food"}
