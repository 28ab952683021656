"""
LedgerAggregator - 집계 계산

거래 목록과 대상 통화에 대한 순수 함수 집합 (부작용 없음).
거래 목록이 바뀌면 호출자가 다시 호출한다.

카테고리 분류:
- 지출: Replenishment / Transfer-out / API 제외 전부
- 입금: Replenishment
- 이체: Transfer-out (지출과 별도로 보고)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from core.ledger.types import ZERO, Transaction
from core.types import NON_EXPENSE_CATEGORIES, CategorySortType, ReservedCategory

if TYPE_CHECKING:
    from core.currency.manager import CurrencyManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BudgetSummary:
    """예산 요약

    actual_balance = initial_balance + total_replenishment
                     - total_expenses - total_to_other_account
    """

    currency: str
    monthly_budget: Decimal
    initial_balance: Decimal
    total_expenses: Decimal
    total_replenishment: Decimal
    total_to_other_account: Decimal
    expected_balance: Decimal
    actual_balance: Decimal


@dataclass(frozen=True)
class CategorySummary:
    """카테고리별 요약"""

    category: str
    transaction_count: int
    total_base_1: Decimal
    total_base_2: Decimal
    average_rate: Decimal


class LedgerAggregator:
    """집계기

    Args:
        currency_manager: 환율 추정기 (기준 통화 포함)

    사용 예시:
    ```python
    aggregator = LedgerAggregator(currency_manager)

    expenses = aggregator.total_expenses(transactions, "UAH")
    balance = aggregator.actual_balance(Decimal("24251.67"), transactions, "UAH")
    ```
    """

    def __init__(self, currency_manager: CurrencyManager):
        self.currency_manager = currency_manager

    # -------------------------------------------------------------------------
    # 합계
    # -------------------------------------------------------------------------

    def _sum(
        self,
        transactions: Sequence[Transaction],
        target_currency: str,
        predicate: Callable[[Transaction], bool],
    ) -> Decimal:
        """조건에 맞는 거래 금액을 대상 통화로 합산

        대상 통화가 base_currency_1이면 first_amount 합계,
        아니면 입력 거래 목록 전체를 환율 추정에 사용해 변환 합계.
        """
        selected = [txn for txn in transactions if predicate(txn)]

        if target_currency == self.currency_manager.base_currency_1:
            return sum((txn.first_amount for txn in selected), ZERO)

        return sum(
            (
                self.currency_manager.convert(txn, target_currency, transactions)
                for txn in selected
            ),
            ZERO,
        )

    def total_expenses(
        self,
        transactions: Iterable[Transaction],
        target_currency: str,
    ) -> Decimal:
        """지출 합계 (Replenishment / Transfer-out / API 제외)"""
        return self._sum(
            list(transactions),
            target_currency,
            lambda txn: txn.valid_category not in NON_EXPENSE_CATEGORIES,
        )

    def total_replenishment(
        self,
        transactions: Iterable[Transaction],
        target_currency: str,
    ) -> Decimal:
        """입금 합계"""
        return self._sum(
            list(transactions),
            target_currency,
            lambda txn: txn.valid_category == ReservedCategory.REPLENISHMENT.value,
        )

    def total_to_other_account(
        self,
        transactions: Iterable[Transaction],
        target_currency: str,
    ) -> Decimal:
        """다른 계좌로 이체 합계"""
        return self._sum(
            list(transactions),
            target_currency,
            lambda txn: txn.valid_category == ReservedCategory.TRANSFER_OUT.value,
        )

    def total_for_category(
        self,
        category: str,
        transactions: Iterable[Transaction],
        target_currency: str,
    ) -> Decimal:
        """특정 카테고리 금액 합계 (분류와 무관하게 라벨로만 필터)"""
        return self._sum(
            list(transactions),
            target_currency,
            lambda txn: txn.valid_category == category,
        )

    # -------------------------------------------------------------------------
    # 잔고
    # -------------------------------------------------------------------------

    def expected_balance(
        self,
        budget: Decimal,
        transactions: Iterable[Transaction],
        target_currency: str,
    ) -> Decimal:
        """예상 잔고 = 예산 - 지출"""
        return budget - self.total_expenses(transactions, target_currency)

    def actual_balance(
        self,
        initial_balance: Decimal,
        transactions: Iterable[Transaction],
        target_currency: str,
    ) -> Decimal:
        """실제 잔고 = 초기 잔고 + 입금 - 지출 - 이체"""
        items = list(transactions)
        return (
            initial_balance
            + self.total_replenishment(items, target_currency)
            - self.total_expenses(items, target_currency)
            - self.total_to_other_account(items, target_currency)
        )

    def budget_summary(
        self,
        monthly_budget: Decimal,
        initial_balance: Decimal,
        transactions: Iterable[Transaction],
        target_currency: str,
    ) -> BudgetSummary:
        """예산 요약 (지출/입금/이체/예상 잔고/실제 잔고)"""
        items = list(transactions)
        expenses = self.total_expenses(items, target_currency)
        replenishment = self.total_replenishment(items, target_currency)
        transfers = self.total_to_other_account(items, target_currency)

        return BudgetSummary(
            currency=target_currency,
            monthly_budget=monthly_budget,
            initial_balance=initial_balance,
            total_expenses=expenses,
            total_replenishment=replenishment,
            total_to_other_account=transfers,
            expected_balance=monthly_budget - expenses,
            actual_balance=initial_balance + replenishment - expenses - transfers,
        )

    # -------------------------------------------------------------------------
    # 환율
    # -------------------------------------------------------------------------

    @staticmethod
    def exchange_rate(transaction: Transaction) -> Decimal:
        """거래 환율 (second가 0이면 0)"""
        return transaction.exchange_rate

    @staticmethod
    def average_exchange_rate(transactions: Iterable[Transaction]) -> Decimal:
        """0이 아닌 거래 환율의 평균 (없으면 0)"""
        rates = [txn.exchange_rate for txn in transactions if txn.exchange_rate != 0]
        if not rates:
            return ZERO
        return sum(rates, ZERO) / len(rates)

    def overall_average_exchange_rate(self, transactions: Iterable[Transaction]) -> Decimal:
        """카테고리별 평균 환율들의 평균 (0인 카테고리는 제외)"""
        grouped: dict[str, list[Transaction]] = {}
        for txn in transactions:
            grouped.setdefault(txn.valid_category, []).append(txn)

        averages = [
            avg
            for avg in (self.average_exchange_rate(txns) for txns in grouped.values())
            if avg != 0
        ]
        if not averages:
            return ZERO
        return sum(averages, ZERO) / len(averages)

    # -------------------------------------------------------------------------
    # 카테고리
    # -------------------------------------------------------------------------

    def category_summary(
        self,
        category: str,
        transactions: Iterable[Transaction],
    ) -> CategorySummary:
        """카테고리별 요약 (거래 수, 두 기준 통화 합계, 평균 환율)"""
        items = list(transactions)
        in_category = [txn for txn in items if txn.valid_category == category]

        return CategorySummary(
            category=category,
            transaction_count=len(in_category),
            total_base_1=self.total_for_category(
                category, items, self.currency_manager.base_currency_1
            ),
            total_base_2=self.total_for_category(
                category, items, self.currency_manager.base_currency_2
            ),
            average_rate=self.average_exchange_rate(in_category),
        )

    def rank_categories(
        self,
        categories: Iterable[str],
        transactions: Iterable[Transaction],
        sort_type: CategorySortType,
    ) -> list[str]:
        """표시 순서로 카테고리 정렬

        - COUNT: 거래 수 내림차순
        - ALPHABETICAL: 대소문자 무시 알파벳순
        - EXPENSES: base_currency_1 지출 합계 내림차순

        동률은 입력 순서 유지 (sorted는 안정 정렬).
        """
        labels = list(categories)
        items = list(transactions)

        if sort_type == CategorySortType.ALPHABETICAL:
            return sorted(labels, key=str.casefold)

        if sort_type == CategorySortType.COUNT:
            counts: dict[str, int] = {}
            for txn in items:
                counts[txn.valid_category] = counts.get(txn.valid_category, 0) + 1
            return sorted(labels, key=lambda label: counts.get(label, 0), reverse=True)

        if sort_type == CategorySortType.EXPENSES:
            base = self.currency_manager.base_currency_1
            totals = {
                label: self.total_expenses(
                    [txn for txn in items if txn.valid_category == label],
                    base,
                )
                for label in labels
            }
            return sorted(labels, key=lambda label: totals[label], reverse=True)

        raise ValueError(f"Unknown sort type: {sort_type}")
