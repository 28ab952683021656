"""
CurrencyManager - 환율 추정 및 통화 변환

실시간 환율 피드 없이, 기록된 거래의 (first / second) 비율을
암묵적 환율로 사용한다. 집계 결과는 항상 기록된 데이터만으로 계산됨.

상태를 갖지 않으며 CurrencyConfig + 거래 목록으로 언제든 재생성 가능.
"""

import logging
from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal

from core.currency.catalog import CurrencyConfig
from core.ledger.types import ZERO, Transaction
from core.utils.timezone import ensure_utc

logger = logging.getLogger(__name__)


class CurrencyManager:
    """환율 추정기

    Args:
        config: 기준 통화 설정

    사용 예시:
    ```python
    manager = CurrencyManager(CurrencyConfig("UAH", "PLN"))

    rate = manager.conversion_rate("UAH", "PLN", transactions)
    pln = manager.convert(txn, "PLN", transactions)
    ```
    """

    def __init__(self, config: CurrencyConfig):
        self.config = config

    @property
    def base_currency_1(self) -> str:
        return self.config.base_currency_1

    @property
    def base_currency_2(self) -> str:
        return self.config.base_currency_2

    @staticmethod
    def _candidates(
        from_code: str,
        to_code: str,
        transactions: Iterable[Transaction],
    ) -> list[Transaction]:
        """(from, to) 통화쌍이고 second_amount가 0이 아닌 거래"""
        return [
            txn
            for txn in transactions
            if txn.first_currency_code == from_code
            and txn.second_currency_code == to_code
            and txn.second_amount != 0
        ]

    def conversion_rate(
        self,
        from_code: str,
        to_code: str,
        transactions: Iterable[Transaction],
    ) -> Decimal | None:
        """가장 최근 거래의 환율

        Args:
            from_code: first 통화
            to_code: second 통화
            transactions: 후보 거래 목록

        Returns:
            first_amount / second_amount (후보 없으면 None)
        """
        candidates = self._candidates(from_code, to_code, transactions)
        if not candidates:
            return None

        # 동일 시각이면 먼저 나온 거래 우선
        latest = candidates[0]
        for txn in candidates[1:]:
            if txn.date > latest.date:
                latest = txn

        return latest.first_amount / latest.second_amount

    def nearest_transaction(
        self,
        from_code: str,
        to_code: str,
        as_of: datetime,
        transactions: Iterable[Transaction],
    ) -> Transaction | None:
        """기준 시각과 가장 가까운 거래 (과거/미래 무관)

        동률이면 먼저 나온 거래 (min()은 첫 최소값을 반환).

        Args:
            from_code: first 통화
            to_code: second 통화
            as_of: 기준 시각
            transactions: 후보 거래 목록

        Returns:
            가장 가까운 거래 또는 None
        """
        candidates = self._candidates(from_code, to_code, transactions)
        if not candidates:
            return None

        as_of = ensure_utc(as_of)
        return min(candidates, key=lambda txn: abs((txn.date - as_of).total_seconds()))

    def rate_near(
        self,
        from_code: str,
        to_code: str,
        as_of: datetime,
        transactions: Iterable[Transaction],
    ) -> Decimal | None:
        """기준 시각에 가장 가까운 거래의 환율 (없으면 None)"""
        nearest = self.nearest_transaction(from_code, to_code, as_of, transactions)
        if nearest is None:
            return None
        return nearest.first_amount / nearest.second_amount

    def convert(
        self,
        transaction: Transaction,
        target_currency: str,
        transactions: Iterable[Transaction],
    ) -> Decimal:
        """거래 금액을 대상 통화로 변환

        1. 거래의 second 통화가 대상 통화면 second_amount 그대로
        2. 아니면 (base_currency_1 → 대상) 최근 환율로 first_amount 변환
        3. 환율 추정 실패 시 0

        Args:
            transaction: 변환할 거래
            target_currency: 대상 통화
            transactions: 환율 추정용 거래 목록

        Returns:
            변환된 금액 (실패 시 0)
        """
        if transaction.second_currency_code == target_currency:
            return transaction.second_amount

        rate = self.conversion_rate(self.base_currency_1, target_currency, transactions)
        if rate is not None and rate != 0:
            return transaction.first_amount / rate

        logger.info(
            "환율 추정 실패: 0으로 처리",
            extra={
                "transaction_id": transaction.id,
                "from": self.base_currency_1,
                "to": target_currency,
            },
        )
        return ZERO
