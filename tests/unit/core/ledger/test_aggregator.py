"""
LedgerAggregator 테스트

지출/입금/이체 분류, 잔고 계산, 평균 환율, 카테고리 정렬
"""

from decimal import Decimal

import pytest

from core.ledger.aggregator import LedgerAggregator
from core.types import CategorySortType


@pytest.fixture
def aggregator(currency_manager) -> LedgerAggregator:
    return LedgerAggregator(currency_manager)


class TestTotals:
    """합계 테스트"""

    def test_expenses_exclude_reserved_non_expense(self, aggregator, make_txn) -> None:
        """입금/이체/API는 지출에서 제외"""
        txns = [
            make_txn("100", "25", category="Food"),
            make_txn("1000", "250", category="Replenishment"),
            make_txn("300", "75", category="Transfer-out"),
            make_txn("50", "12.5", category="API"),
            make_txn("20", "5", category=None),  # Other
        ]

        assert aggregator.total_expenses(txns, "UAH") == Decimal("120")

    def test_expenses_in_second_currency(self, aggregator, make_txn) -> None:
        txns = [make_txn("100", "25", day=1), make_txn("200", "50", day=2)]

        assert aggregator.total_expenses(txns, "PLN") == Decimal("75")

    def test_expenses_in_second_currency_infers_missing(self, aggregator, make_txn) -> None:
        """second가 다른 통화인 거래는 최근 환율로 변환"""
        txns = [
            make_txn("100", "25", day=1),
            make_txn("200", "5", day=2, second_code="USD"),
        ]

        assert aggregator.total_expenses(txns, "PLN") == Decimal("75")

    def test_replenishment(self, aggregator, make_txn) -> None:
        txns = [
            make_txn("1000", "250", category="Replenishment"),
            make_txn("100", "25", category="Food"),
        ]

        assert aggregator.total_replenishment(txns, "UAH") == Decimal("1000")
        assert aggregator.total_replenishment(txns, "PLN") == Decimal("250")

    def test_transfer_out(self, aggregator, make_txn) -> None:
        txns = [make_txn("300", "75", category="Transfer-out")]

        assert aggregator.total_to_other_account(txns, "UAH") == Decimal("300")

    def test_total_for_category(self, aggregator, make_txn) -> None:
        txns = [make_txn("10", category="Food"), make_txn("20", category="Transport")]

        assert aggregator.total_for_category("Transport", txns, "UAH") == Decimal("20")

    def test_empty(self, aggregator) -> None:
        assert aggregator.total_expenses([], "UAH") == Decimal("0")
        assert aggregator.total_expenses([], "PLN") == Decimal("0")


class TestBalances:
    """잔고 테스트"""

    def test_expected_balance(self, aggregator, make_txn) -> None:
        txns = [make_txn("1500", category="Food")]

        assert aggregator.expected_balance(Decimal("20000"), txns, "UAH") == Decimal("18500")

    def test_actual_balance(self, aggregator, make_txn) -> None:
        """초기 잔고 + 입금 - 지출 - 이체"""
        txns = [
            make_txn("1000", category="Replenishment"),
            make_txn("300", category="Food"),
            make_txn("200", category="Transfer-out"),
            make_txn("999", category="API"),
        ]

        assert aggregator.actual_balance(Decimal("500"), txns, "UAH") == Decimal("1000")

    def test_budget_summary_identity(self, aggregator, make_txn) -> None:
        txns = [
            make_txn("1000", "250", category="Replenishment", day=1),
            make_txn("300", "75", category="Food", day=2),
            make_txn("200", "50", category="Transfer-out", day=3),
        ]

        summary = aggregator.budget_summary(Decimal("2000"), Decimal("100"), txns, "PLN")

        assert summary.currency == "PLN"
        assert summary.total_expenses == Decimal("75")
        assert summary.expected_balance == Decimal("1925")
        assert summary.actual_balance == (
            summary.initial_balance
            + summary.total_replenishment
            - summary.total_expenses
            - summary.total_to_other_account
        )


class TestExchangeRates:
    """환율 통계 테스트"""

    def test_average_ignores_zero(self, aggregator, make_txn) -> None:
        txns = [make_txn("100", "25"), make_txn("100", "20"), make_txn("100", "0")]

        assert aggregator.average_exchange_rate(txns) == Decimal("4.5")

    def test_average_empty(self, aggregator) -> None:
        assert aggregator.average_exchange_rate([]) == Decimal("0")

    def test_overall_average_is_mean_of_category_means(self, aggregator, make_txn) -> None:
        """카테고리별 평균의 평균 (0 카테고리 제외)"""
        txns = [
            make_txn("100", "25", category="Food"),
            make_txn("100", "20", category="Food"),
            make_txn("100", "10", category="Transport"),
            make_txn("100", "0", category="Charity"),
        ]

        # Food 4.5, Transport 10 → 7.25
        assert aggregator.overall_average_exchange_rate(txns) == Decimal("7.25")

    def test_exchange_rate_passthrough(self, aggregator, make_txn) -> None:
        assert aggregator.exchange_rate(make_txn("100", "25")) == Decimal("4")


class TestCategories:
    """카테고리 요약/정렬 테스트"""

    def test_category_summary(self, aggregator, make_txn) -> None:
        txns = [
            make_txn("100", "25", category="Food", day=1),
            make_txn("200", "50", category="Food", day=2),
            make_txn("10", "2", category="Transport", day=3),
        ]

        summary = aggregator.category_summary("Food", txns)

        assert summary.transaction_count == 2
        assert summary.total_base_1 == Decimal("300")
        assert summary.total_base_2 == Decimal("75")
        assert summary.average_rate == Decimal("4")

    def test_rank_by_count(self, aggregator, make_txn) -> None:
        txns = [
            make_txn("1", category="Transport"),
            make_txn("1", category="Transport"),
            make_txn("1", category="Food"),
        ]

        ranked = aggregator.rank_categories(
            ["Food", "Charity", "Transport"], txns, CategorySortType.COUNT
        )

        assert ranked == ["Transport", "Food", "Charity"]

    def test_rank_alphabetical_case_insensitive(self, aggregator) -> None:
        ranked = aggregator.rank_categories(
            ["food", "Charity", "Transport"], [], CategorySortType.ALPHABETICAL
        )

        assert ranked == ["Charity", "food", "Transport"]

    def test_rank_by_expenses(self, aggregator, make_txn) -> None:
        txns = [
            make_txn("50", category="Food"),
            make_txn("500", category="Housing"),
            make_txn("5000", category="Replenishment"),
        ]

        ranked = aggregator.rank_categories(
            ["Food", "Replenishment", "Housing"], txns, CategorySortType.EXPENSES
        )

        # Replenishment는 지출이 아니므로 0
        assert ranked == ["Housing", "Food", "Replenishment"]

    def test_rank_ties_keep_input_order(self, aggregator) -> None:
        ranked = aggregator.rank_categories(["B", "A", "C"], [], CategorySortType.COUNT)

        assert ranked == ["B", "A", "C"]
