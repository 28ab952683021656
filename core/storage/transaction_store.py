"""
TransactionStore - 거래 저장소

작업 단위(Unit of Work) 방식:
create/update/delete는 현재 SQLite 트랜잭션에 쌓이고(staged)
논리 작업 하나당 save() 한 번으로 커밋된다.
save() 실패 시 SQLite 트랜잭션 전체 롤백.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from core.ledger.types import Transaction
from core.utils.timezone import ensure_utc, now_utc

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


_COLUMNS = (
    "id, date, category, first_amount, first_currency_code, "
    "second_amount, second_currency_code, comment"
)

# 정렬 가능한 컬럼 (SQL injection 방지용 화이트리스트)
SORTABLE_FIELDS: frozenset[str] = frozenset({"date", "category", "first_amount", "second_amount"})


class TransactionStore:
    """거래 저장소

    Args:
        db: SQLite 어댑터

    사용 예시:
    ```python
    store = TransactionStore(db)

    await store.create(txn)
    if not await store.save():
        ...  # 롤백됨

    recent = await store.query(sort_by="date", descending=True)
    ```
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    # -------------------------------------------------------------------------
    # 변경 (staged)
    # -------------------------------------------------------------------------

    async def create(self, transaction: Transaction) -> None:
        """거래 추가 (커밋 전)"""
        await self.db.execute(
            f"""
            INSERT INTO transactions ({_COLUMNS})
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            self._to_params(transaction),
        )

    async def update(self, transaction: Transaction) -> None:
        """거래 수정 (커밋 전)"""
        await self.db.execute(
            """
            UPDATE transactions SET
                date = ?,
                category = ?,
                first_amount = ?,
                first_currency_code = ?,
                second_amount = ?,
                second_currency_code = ?,
                comment = ?,
                updated_at = ?
            WHERE id = ?
            """,
            (
                *self._to_params(transaction)[1:],
                now_utc().isoformat(),
                transaction.id,
            ),
        )

    async def delete(self, transaction: Transaction) -> None:
        """거래 삭제 (커밋 전)"""
        await self.db.execute(
            "DELETE FROM transactions WHERE id = ?",
            (transaction.id,),
        )

    async def reassign_category(self, old_label: str, new_label: str) -> int:
        """카테고리 일괄 변경 (커밋 전)

        Returns:
            변경된 거래 수
        """
        cursor = await self.db.execute(
            """
            UPDATE transactions SET category = ?, updated_at = ?
            WHERE category = ?
            """,
            (new_label, now_utc().isoformat(), old_label),
        )
        return cursor.rowcount

    async def delete_by_category(self, label: str) -> int:
        """카테고리의 모든 거래 삭제 (커밋 전)

        Returns:
            삭제된 거래 수
        """
        cursor = await self.db.execute(
            "DELETE FROM transactions WHERE category = ?",
            (label,),
        )
        return cursor.rowcount

    async def save(self) -> bool:
        """staged 변경 커밋

        Returns:
            성공 여부 (실패 시 롤백 후 False)
        """
        try:
            await self.db.commit()
            return True
        except sqlite3.Error as e:
            logger.error(
                "거래 저장 실패: 롤백",
                extra={"error": str(e)},
            )
            await self.discard()
            return False

    async def discard(self) -> None:
        """staged 변경 폐기"""
        try:
            await self.db.rollback()
        except sqlite3.Error as e:
            logger.error(f"롤백 실패: {e}")

    # -------------------------------------------------------------------------
    # 조회
    # -------------------------------------------------------------------------

    async def get(self, transaction_id: str) -> Transaction | None:
        """ID로 거래 조회"""
        row = await self.db.fetchone(
            f"SELECT {_COLUMNS} FROM transactions WHERE id = ?",
            (transaction_id,),
        )
        return Transaction.from_row(row) if row else None

    async def exists(self, transaction_id: str) -> bool:
        """ID 존재 여부"""
        row = await self.db.fetchone(
            "SELECT 1 FROM transactions WHERE id = ?",
            (transaction_id,),
        )
        return row is not None

    async def query(
        self,
        predicate: Callable[[Transaction], bool] | None = None,
        sort_by: str = "date",
        descending: bool = True,
        start: datetime | None = None,
        end: datetime | None = None,
        category: str | None = None,
    ) -> list[Transaction]:
        """거래 목록 조회

        Args:
            predicate: 추가 필터 (Python 측)
            sort_by: 정렬 컬럼 (date, category, first_amount, second_amount)
            descending: 내림차순 여부
            start: 시작 시각 (포함)
            end: 종료 시각 (제외)
            category: 카테고리 라벨 필터

        Returns:
            거래 목록 (동일 정렬 키는 삽입 순서)
        """
        if sort_by not in SORTABLE_FIELDS:
            raise ValueError(f"Unsupported sort field: {sort_by}")

        sql = f"SELECT {_COLUMNS} FROM transactions WHERE 1=1"
        params: list[str] = []

        if start is not None:
            sql += " AND date >= ?"
            params.append(ensure_utc(start).isoformat())
        if end is not None:
            sql += " AND date < ?"
            params.append(ensure_utc(end).isoformat())
        if category is not None:
            sql += " AND category = ?"
            params.append(category)

        rows = await self.db.fetchall(sql + " ORDER BY rowid", tuple(params))
        transactions = [Transaction.from_row(row) for row in rows]

        if predicate is not None:
            transactions = [txn for txn in transactions if predicate(txn)]

        # 금액은 TEXT로 저장되므로 Python에서 정렬 (안정 정렬)
        transactions.sort(key=self._sort_key(sort_by), reverse=descending)
        return transactions

    async def count(self, predicate: Callable[[Transaction], bool] | None = None) -> int:
        """거래 수 조회"""
        if predicate is None:
            row = await self.db.fetchone("SELECT COUNT(*) FROM transactions")
            return int(row[0]) if row else 0

        return len(await self.query(predicate=predicate))

    async def all(self) -> list[Transaction]:
        """전체 거래 (환율 추정용)"""
        return await self.query(sort_by="date", descending=False)

    # -------------------------------------------------------------------------
    # 내부 헬퍼
    # -------------------------------------------------------------------------

    @staticmethod
    def _to_params(txn: Transaction) -> tuple[str | None, ...]:
        return (
            txn.id,
            txn.date.isoformat(),
            txn.category,
            str(txn.first_amount),
            txn.first_currency_code,
            str(txn.second_amount),
            txn.second_currency_code,
            txn.comment,
        )

    @staticmethod
    def _sort_key(sort_by: str) -> Callable[[Transaction], object]:
        if sort_by == "date":
            return lambda txn: txn.date
        if sort_by == "category":
            return lambda txn: txn.valid_category.casefold()
        if sort_by == "first_amount":
            return lambda txn: txn.first_amount
        return lambda txn: txn.second_amount
