"""
TransactionService - 수동 입력/수정/삭제

단일 통화 입력 정책:
- 보조 금액이 없거나 0이면 보조 통화는 base_currency_2로 강제되고
  금액은 기준 시각에 가장 가까운 거래의 환율로 추정된다.
  (생성: 현재 시각, 수정: 거래 자신의 날짜)
- 추정 실패 시 보조 금액 0으로 저장 (저장을 막지 않음)
- 0이 아닌 보조 금액이 주어지면 추정 없이 그대로 저장

모든 변경은 save() 한 번으로 끝난다. 저장 실패 시 SQLite 롤백 +
메모리 상의 Transaction 복원 후 MutationResult(ok=False) 반환.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any

from core.errors import LedgerValidationError, NotFoundError
from core.ledger.types import ZERO, MutationResult, Transaction
from core.types import PROTECTED_CATEGORIES, ReservedCategory
from core.utils.timezone import ensure_utc, now_utc

if TYPE_CHECKING:
    from core.currency.manager import CurrencyManager
    from core.storage.transaction_store import TransactionStore

logger = logging.getLogger(__name__)


def parse_amount(value: Any, field: str = "first_amount") -> Decimal:
    """금액 파싱 (유한한 숫자만 허용)

    Args:
        value: 문자열/숫자
        field: 에러 메시지용 필드명

    Returns:
        Decimal 금액

    Raises:
        LedgerValidationError: 파싱 불가 또는 NaN/Infinity
    """
    if isinstance(value, bool) or value is None:
        raise LedgerValidationError(f"금액을 입력하세요: {field}", field=field)

    text = value.strip() if isinstance(value, str) else str(value)
    if not text:
        raise LedgerValidationError(f"금액을 입력하세요: {field}", field=field)

    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise LedgerValidationError(f"숫자가 아닌 금액입니다: '{value}'", field=field)

    if not amount.is_finite():
        raise LedgerValidationError(f"유한한 금액이 아닙니다: '{value}'", field=field)

    return amount


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class TransactionService:
    """거래 변경 서비스

    Args:
        store: 거래 저장소
        currency_manager: 환율 추정기 (기준 통화/카탈로그 포함)
        category_labels: 현재 CategoryRegistry 라벨

    사용 예시:
    ```python
    service = TransactionService(store, currency_manager, registry.labels)

    result = await service.create("1000", category="Food")
    if not result.ok:
        print(result.error)
    ```
    """

    def __init__(
        self,
        store: TransactionStore,
        currency_manager: CurrencyManager,
        category_labels: Iterable[str],
    ):
        self.store = store
        self.currency_manager = currency_manager
        self._category_labels = (set(category_labels) | PROTECTED_CATEGORIES) - {
            ReservedCategory.ALL.value
        }

    # -------------------------------------------------------------------------
    # 검증
    # -------------------------------------------------------------------------

    def _validate_category(self, category: str | None) -> str:
        if _is_blank(category):
            raise LedgerValidationError("카테고리를 선택하세요", field="category")

        label = category.strip()
        if label not in self._category_labels:
            raise LedgerValidationError(
                f"알 수 없는 카테고리입니다: '{label}'",
                field="category",
            )
        return label

    def _validate_currency(self, code: str | None, field: str) -> str:
        catalog = self.currency_manager.config.catalog
        if _is_blank(code):
            raise LedgerValidationError(f"통화를 선택하세요: {field}", field=field)
        if not catalog.is_known(code):
            raise LedgerValidationError(f"알 수 없는 통화 코드입니다: '{code}'", field=field)
        return code

    # -------------------------------------------------------------------------
    # 단일 통화 정책
    # -------------------------------------------------------------------------

    def _infer_second_amount(
        self,
        first_amount: Decimal,
        first_currency_code: str,
        anchor: datetime,
        transactions: list[Transaction],
    ) -> Decimal:
        """기준 시각에 가장 가까운 거래 환율로 보조 금액 추정 (실패 시 0)"""
        base_2 = self.currency_manager.base_currency_2
        rate = self.currency_manager.rate_near(first_currency_code, base_2, anchor, transactions)
        if rate is None or rate == 0:
            logger.info(
                "환율 추정 실패: 보조 금액 0으로 저장",
                extra={"from": first_currency_code, "to": base_2, "as_of": anchor.isoformat()},
            )
            return ZERO

        return first_amount / rate

    async def _apply_entry(
        self,
        txn: Transaction,
        first_amount: Decimal,
        first_currency_code: str,
        second_amount: Decimal | None,
        second_currency_code: str | None,
        anchor: datetime,
    ) -> None:
        txn.first_amount = first_amount
        txn.first_currency_code = first_currency_code

        if second_amount is not None and second_amount != 0:
            txn.second_amount = second_amount
            txn.second_currency_code = second_currency_code or self.currency_manager.base_currency_2
            return

        # 자기 자신은 환율 근거에서 제외 (수정 시 이전 값 참조 방지)
        history = [other for other in await self.store.all() if other.id != txn.id]
        txn.second_currency_code = self.currency_manager.base_currency_2
        txn.second_amount = self._infer_second_amount(
            first_amount, first_currency_code, anchor, history
        )

    def _parse_entry(
        self,
        first_amount: Any,
        first_currency_code: str | None,
        second_amount: Any,
        second_currency_code: str | None,
        category: str | None,
    ) -> tuple[Decimal, str, Decimal | None, str | None, str]:
        """입력 검증 (변경 전에 모두 수행)"""
        first = parse_amount(first_amount, "first_amount")
        first_code = self._validate_currency(
            first_currency_code or self.currency_manager.base_currency_1,
            "first_currency_code",
        )
        second = None if _is_blank(second_amount) else parse_amount(second_amount, "second_amount")
        second_code = (
            None
            if _is_blank(second_currency_code)
            else self._validate_currency(second_currency_code, "second_currency_code")
        )
        label = self._validate_category(category)
        return first, first_code, second, second_code, label

    # -------------------------------------------------------------------------
    # 변경 작업
    # -------------------------------------------------------------------------

    async def create(
        self,
        first_amount: Any,
        first_currency_code: str | None = None,
        second_amount: Any = None,
        second_currency_code: str | None = None,
        category: str | None = None,
        comment: str = "",
        date: datetime | None = None,
    ) -> MutationResult:
        """거래 생성

        환율 추정 기준 시각은 현재 시각.

        Raises:
            LedgerValidationError: 입력 검증 실패 (저장소 변경 없음)
        """
        first, first_code, second, second_code, label = self._parse_entry(
            first_amount, first_currency_code, second_amount, second_currency_code, category
        )

        txn = Transaction(
            first_amount=first,
            first_currency_code=first_code,
            category=label,
            comment=(comment or "").strip(),
            date=ensure_utc(date) if date else now_utc(),
        )
        await self._apply_entry(txn, first, first_code, second, second_code, now_utc())

        try:
            await self.store.create(txn)
        except sqlite3.Error as e:
            await self.store.discard()
            logger.error("거래 생성 실패", extra={"transaction_id": txn.id, "error": str(e)})
            return MutationResult(ok=False, transaction=None, error=str(e))

        if not await self.store.save():
            return MutationResult(ok=False, transaction=None, error="거래 저장에 실패했습니다")

        logger.info(
            "거래 생성",
            extra={"transaction_id": txn.id, "category": txn.category},
        )
        return MutationResult(ok=True, transaction=txn)

    async def update(
        self,
        transaction_id: str,
        first_amount: Any,
        first_currency_code: str | None = None,
        second_amount: Any = None,
        second_currency_code: str | None = None,
        category: str | None = None,
        comment: str = "",
        date: datetime | None = None,
    ) -> MutationResult:
        """거래 수정

        환율 추정 기준 시각은 거래 자신의 날짜 (date가 주어지면 새 날짜).

        Raises:
            NotFoundError: 거래 없음
            LedgerValidationError: 입력 검증 실패 (저장소 변경 없음)
        """
        txn = await self.store.get(transaction_id)
        if txn is None:
            raise NotFoundError(f"거래를 찾을 수 없습니다: {transaction_id}")

        first, first_code, second, second_code, label = self._parse_entry(
            first_amount, first_currency_code, second_amount, second_currency_code, category
        )

        snapshot = txn.snapshot()
        txn.category = label
        txn.comment = (comment or "").strip()
        if date is not None:
            txn.date = ensure_utc(date)
        await self._apply_entry(txn, first, first_code, second, second_code, txn.date)

        try:
            await self.store.update(txn)
        except sqlite3.Error as e:
            await self.store.discard()
            txn.restore(snapshot)
            logger.error("거래 수정 실패", extra={"transaction_id": txn.id, "error": str(e)})
            return MutationResult(ok=False, transaction=txn, error=str(e))

        if not await self.store.save():
            txn.restore(snapshot)
            return MutationResult(ok=False, transaction=txn, error="거래 저장에 실패했습니다")

        logger.info("거래 수정", extra={"transaction_id": txn.id})
        return MutationResult(ok=True, transaction=txn)

    async def delete(self, transaction_id: str) -> MutationResult:
        """거래 삭제

        Raises:
            NotFoundError: 거래 없음
        """
        txn = await self.store.get(transaction_id)
        if txn is None:
            raise NotFoundError(f"거래를 찾을 수 없습니다: {transaction_id}")

        try:
            await self.store.delete(txn)
        except sqlite3.Error as e:
            await self.store.discard()
            logger.error("거래 삭제 실패", extra={"transaction_id": txn.id, "error": str(e)})
            return MutationResult(ok=False, transaction=txn, error=str(e))

        if not await self.store.save():
            return MutationResult(ok=False, transaction=txn, error="거래 삭제에 실패했습니다")

        logger.info("거래 삭제", extra={"transaction_id": txn.id})
        return MutationResult(ok=True, transaction=txn)
