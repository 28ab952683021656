"""
StatementImporter - 은행 명세서 일괄 import

처리 흐름:
1. 외부 거래 ID → 결정적 UUID (재import 시 같은 ID → 중복 건너뜀)
2. amount / 100 → base_currency_1 금액
3. (base_currency_1, base_currency_2) 최근접 거래 환율로 보조 금액 추정,
   실패 시 operationAmount / 100 사용
4. 부호로 분류: 양수 → Replenishment, 음수 → API (절대값 저장)
5. 잘못된 레코드는 건너뛰고 나머지는 한 번의 save()로 커밋
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from adapters.monobank.models import StatementItem
from core.constants import AmountScale
from core.errors import FeedError
from core.ledger.types import Transaction
from core.types import ReservedCategory
from core.utils.dedup import make_import_id
from core.utils.timezone import ensure_utc, now_utc, start_of_month, to_timestamp, utc_from_timestamp

if TYPE_CHECKING:
    from adapters.interfaces import IBankFeedClient
    from core.currency.manager import CurrencyManager
    from core.storage.transaction_store import TransactionStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportResult:
    """import 결과

    Attributes:
        imported: 새로 저장된 거래 수
        skipped_duplicates: 이미 존재해서 건너뛴 수
        rejected: 형식 오류로 건너뛴 수
        error: 실패 메시지 (조회/디코딩/저장 실패)
        retryable: 재시도 가능 여부
        failed_at: 실패 단계 ("feed" 또는 "storage")
    """

    imported: int = 0
    skipped_duplicates: int = 0
    rejected: int = 0
    error: str | None = None
    retryable: bool = False
    failed_at: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "imported": self.imported,
            "skipped_duplicates": self.skipped_duplicates,
            "rejected": self.rejected,
            "error": self.error,
            "retryable": self.retryable,
            "failed_at": self.failed_at,
        }


def _to_major(minor_units: int) -> Decimal:
    return Decimal(minor_units) / AmountScale.MINOR_UNITS_PER_MAJOR


class StatementImporter:
    """은행 명세서 import

    Args:
        store: 거래 저장소
        currency_manager: 환율 추정기

    사용 예시:
    ```python
    importer = StatementImporter(store, currency_manager)

    result = await importer.fetch_and_import(client)
    print(result.imported, result.skipped_duplicates)
    ```
    """

    def __init__(self, store: TransactionStore, currency_manager: CurrencyManager):
        self.store = store
        self.currency_manager = currency_manager

    def build_transaction(
        self,
        item: StatementItem,
        history: list[Transaction],
    ) -> Transaction:
        """명세서 항목 → 거래 변환 (저장하지 않음)"""
        base_1 = self.currency_manager.base_currency_1
        base_2 = self.currency_manager.base_currency_2

        amount = _to_major(item.amount)
        date = utc_from_timestamp(item.time)

        rate = self.currency_manager.rate_near(base_1, base_2, date, history)
        if rate is not None and rate != 0:
            second_amount = amount / rate
        else:
            second_amount = _to_major(item.operation_amount)
            operation_code = self.currency_manager.config.catalog.code_for_numeric(
                item.currency_code
            )
            if operation_code != base_2:
                logger.info(
                    "환율 추정 실패: 거래 통화 금액을 보조 금액으로 사용",
                    extra={
                        "record_id": item.id,
                        "operation_currency": operation_code or item.currency_code,
                    },
                )

        if amount > 0:
            category = ReservedCategory.REPLENISHMENT.value
        else:
            category = ReservedCategory.API.value
            amount = abs(amount)
            second_amount = abs(second_amount)

        return Transaction(
            id=make_import_id(item.id),
            date=date,
            category=category,
            first_amount=amount,
            first_currency_code=base_1,
            second_amount=second_amount,
            second_currency_code=base_2,
            comment=item.description,
        )

    async def import_records(
        self,
        records: Iterable[Mapping[str, Any] | StatementItem],
    ) -> ImportResult:
        """레코드 목록 import (한 번의 save)

        Args:
            records: API JSON dict 또는 StatementItem

        Returns:
            ImportResult
        """
        # 환율 근거는 import 이전의 거래만 사용
        history = await self.store.all()
        seen: set[str] = set()
        imported = skipped = rejected = 0

        try:
            for record in records:
                try:
                    item = (
                        record
                        if isinstance(record, StatementItem)
                        else StatementItem.from_api(record)
                    )
                    txn = self.build_transaction(item, history)
                except (KeyError, TypeError, ValueError, ArithmeticError) as e:
                    rejected += 1
                    logger.warning(f"잘못된 명세서 레코드 건너뜀: {e}")
                    continue

                if txn.id in seen or await self.store.exists(txn.id):
                    skipped += 1
                    continue

                await self.store.create(txn)
                seen.add(txn.id)
                imported += 1

        except sqlite3.Error as e:
            await self.store.discard()
            logger.error(f"명세서 import 실패: {e}")
            return ImportResult(
                skipped_duplicates=skipped,
                rejected=rejected,
                error=str(e),
                failed_at="storage",
            )

        if imported and not await self.store.save():
            return ImportResult(
                skipped_duplicates=skipped,
                rejected=rejected,
                error="import 저장에 실패했습니다",
                failed_at="storage",
            )

        logger.info(
            "명세서 import 완료",
            extra={"imported": imported, "skipped": skipped, "rejected": rejected},
        )
        return ImportResult(imported=imported, skipped_duplicates=skipped, rejected=rejected)

    async def fetch_and_import(
        self,
        client: IBankFeedClient,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> ImportResult:
        """은행 피드 조회 후 import

        기간 미지정 시 이번 달 1일(UTC)부터 현재까지.

        Args:
            client: 은행 피드 클라이언트
            start: 시작 시각
            end: 종료 시각

        Returns:
            ImportResult (조회 실패 시 error/retryable 설정)
        """
        end = ensure_utc(end) if end else now_utc()
        start = ensure_utc(start) if start else start_of_month(end)

        try:
            records = await client.fetch_transactions(to_timestamp(start), to_timestamp(end))
        except FeedError as e:
            logger.error(f"명세서 조회 실패: {e}", extra={"retryable": e.retryable})
            return ImportResult(error=str(e), retryable=e.retryable, failed_at="feed")

        logger.info(
            "명세서 조회 완료",
            extra={"count": len(records), "from": start.isoformat(), "to": end.isoformat()},
        )
        return await self.import_records(records)

    async def delete_imported(self) -> int:
        """은행에서 import된 출금(API 카테고리) 전체 삭제

        Returns:
            삭제된 거래 수 (저장 실패 시 0)
        """
        try:
            removed = await self.store.delete_by_category(ReservedCategory.API.value)
        except sqlite3.Error as e:
            await self.store.discard()
            logger.error(f"API 거래 삭제 실패: {e}")
            return 0

        if not await self.store.save():
            return 0

        logger.info(f"API 거래 {removed}건 삭제")
        return removed
