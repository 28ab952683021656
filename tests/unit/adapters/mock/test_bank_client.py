"""
Mock 은행 피드 클라이언트 테스트
"""

import pytest

from adapters.interfaces import IBankFeedClient
from adapters.mock.bank_client import MockBankFeedClient
from core.errors import FeedTimeoutError


class TestMockBankFeedClient:
    """MockBankFeedClient 테스트"""

    def test_implements_protocol(self) -> None:
        assert isinstance(MockBankFeedClient(), IBankFeedClient)

    @pytest.mark.asyncio
    async def test_filters_by_time_range(self) -> None:
        client = MockBankFeedClient()
        client.add_record("a", time=100, amount=-1)
        client.add_record("b", time=200, amount=-2)
        client.add_record("c", time=300, amount=-3)

        result = await client.fetch_transactions(150, 300)

        assert [r["id"] for r in result] == ["b", "c"]

    @pytest.mark.asyncio
    async def test_records_calls(self) -> None:
        client = MockBankFeedClient()

        await client.fetch_transactions(1, 2, account="x")

        assert client.state.calls == [(1, 2, "x")]

    @pytest.mark.asyncio
    async def test_fail_next_only_once(self) -> None:
        client = MockBankFeedClient()
        client.set_fail_next(FeedTimeoutError("timeout"))

        with pytest.raises(FeedTimeoutError):
            await client.fetch_transactions(0, 10)

        assert await client.fetch_transactions(0, 10) == []

    @pytest.mark.asyncio
    async def test_returns_copies(self) -> None:
        client = MockBankFeedClient()
        client.add_record("a", time=1, amount=-1)

        result = await client.fetch_transactions(0, 10)
        result[0]["amount"] = 999

        assert client.state.records[0]["amount"] == -1

    @pytest.mark.asyncio
    async def test_close(self) -> None:
        client = MockBankFeedClient()

        await client.close()

        assert client.closed is True
