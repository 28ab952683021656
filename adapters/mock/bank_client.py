"""
Mock 은행 피드 클라이언트

테스트용 Mock 클라이언트. IBankFeedClient Protocol 준수.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any

from adapters.monobank.models import ClientInfo, MonobankAccount
from core.errors import FeedError


@dataclass
class MockBankState:
    """Mock 상태 (메모리 내 저장)"""

    # 명세서 레코드 (API JSON 형식)
    records: list[dict[str, Any]] = field(default_factory=list)

    # 시뮬레이션 옵션
    next_error: FeedError | None = None
    delay_sec: float = 0.0

    # 호출 기록 (from_ts, to_ts, account)
    calls: list[tuple[int, int, str | None]] = field(default_factory=list)


class MockBankFeedClient:
    """Mock 은행 피드 클라이언트

    사용 예시:
    ```python
    client = MockBankFeedClient()
    client.add_record("ext-1", time=1708444800, amount=-95000)

    # 실패 시뮬레이션
    client.set_fail_next(FeedTimeoutError("timeout"))
    ```
    """

    def __init__(self, state: MockBankState | None = None):
        self.state = state or MockBankState()
        self.closed = False

    def add_record(
        self,
        record_id: str,
        time: int,
        amount: int,
        operation_amount: int | None = None,
        description: str = "",
        currency_code: int = 980,
        mcc: int = 0,
    ) -> dict[str, Any]:
        """명세서 레코드 추가"""
        record = {
            "id": record_id,
            "time": time,
            "description": description,
            "mcc": mcc,
            "amount": amount,
            "operationAmount": amount if operation_amount is None else operation_amount,
            "currencyCode": currency_code,
            "balance": 0,
        }
        self.state.records.append(record)
        return record

    def set_fail_next(self, error: FeedError) -> None:
        """다음 조회 실패 설정"""
        self.state.next_error = error

    async def fetch_transactions(
        self,
        from_ts: int,
        to_ts: int,
        account: str | None = None,
    ) -> list[dict[str, Any]]:
        self.state.calls.append((from_ts, to_ts, account))

        if self.state.delay_sec:
            await asyncio.sleep(self.state.delay_sec)

        if self.state.next_error is not None:
            error, self.state.next_error = self.state.next_error, None
            raise error

        return [
            dict(record)
            for record in self.state.records
            if not isinstance(record.get("time"), int) or from_ts <= record["time"] <= to_ts
        ]

    async def fetch_client_info(self) -> ClientInfo:
        return ClientInfo(
            client_id="mock",
            name="Mock Client",
            accounts=(MonobankAccount(id="0", currency_code=980),),
        )

    async def close(self) -> None:
        self.closed = True
