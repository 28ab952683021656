"""
StatementPoller

은행 명세서를 조회해 Ledger로 import.
기준 통화는 폴링마다 ConfigStore에서 다시 읽는다.
"""

import logging
from datetime import datetime
from typing import Any

from adapters.interfaces import IBankFeedClient
from core.constants import Defaults
from core.currency.catalog import CurrencyConfig
from core.currency.manager import CurrencyManager
from core.ledger.importer import StatementImporter
from core.storage.config_store import ConfigStore
from core.storage.transaction_store import TransactionStore
from feed.base import BasePoller

logger = logging.getLogger(__name__)


class StatementPoller(BasePoller):
    """명세서 Poller

    Args:
        client: 은행 피드 클라이언트
        config_store: 설정 저장소
        transaction_store: 거래 저장소
        poll_interval_seconds: 폴링 간격 (초)

    사용 예시:
    ```python
    poller = StatementPoller(client, config_store, transaction_store)
    await poller.initialize()

    if await poller.should_poll():
        result = await poller.poll()
    ```
    """

    def __init__(
        self,
        client: IBankFeedClient,
        config_store: ConfigStore,
        transaction_store: TransactionStore,
        poll_interval_seconds: int = Defaults.POLL_INTERVAL_SEC,
    ):
        super().__init__(client, config_store, poll_interval_seconds)
        self.transaction_store = transaction_store

    @property
    def poller_name(self) -> str:
        return "statement"

    async def _build_importer(self) -> StatementImporter:
        currency = await self.config_store.get("currency")
        manager = CurrencyManager(CurrencyConfig.from_dict(currency))
        return StatementImporter(self.transaction_store, manager)

    async def _do_poll(self, since: datetime, until: datetime) -> dict[str, Any]:
        importer = await self._build_importer()
        result = await importer.fetch_and_import(self.client, since, until)
        return result.to_dict()
