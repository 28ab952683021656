"""
의존성 주입

FastAPI의 Depends를 사용한 의존성 관리.
CurrencyManager/CategoryRegistry는 매 요청마다 ConfigStore에서 다시 생성 (전역 상태 없음).
"""

from typing import AsyncGenerator

from fastapi import Depends

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import Settings, get_settings
from core.currency.catalog import CurrencyConfig
from core.currency.manager import CurrencyManager
from core.ledger.aggregator import LedgerAggregator
from core.ledger.categories import CategoryRegistry
from core.ledger.importer import StatementImporter
from core.ledger.service import TransactionService
from core.storage.config_store import ConfigStore
from core.storage.transaction_store import TransactionStore
from feed.statement_poller import StatementPoller


def get_app_settings() -> Settings:
    """애플리케이션 설정 반환"""
    return get_settings()


async def get_db() -> AsyncGenerator[SQLiteAdapter, None]:
    """DB 세션 반환 (요청마다 연결)"""
    settings = get_settings()
    async with SQLiteAdapter(settings.db_path) as db:
        yield db


def get_config_store(db: SQLiteAdapter = Depends(get_db)) -> ConfigStore:
    return ConfigStore(db)


def get_transaction_store(db: SQLiteAdapter = Depends(get_db)) -> TransactionStore:
    return TransactionStore(db)


async def get_currency_config(
    config_store: ConfigStore = Depends(get_config_store),
) -> CurrencyConfig:
    """현재 기준 통화 설정"""
    return CurrencyConfig.from_dict(await config_store.get("currency"))


def get_currency_manager(
    currency_config: CurrencyConfig = Depends(get_currency_config),
) -> CurrencyManager:
    return CurrencyManager(currency_config)


async def get_category_registry(
    config_store: ConfigStore = Depends(get_config_store),
    transaction_store: TransactionStore = Depends(get_transaction_store),
) -> CategoryRegistry:
    return await CategoryRegistry(config_store, transaction_store).load()


def get_transaction_service(
    transaction_store: TransactionStore = Depends(get_transaction_store),
    currency_manager: CurrencyManager = Depends(get_currency_manager),
    registry: CategoryRegistry = Depends(get_category_registry),
) -> TransactionService:
    return TransactionService(transaction_store, currency_manager, registry.selectable_labels)


def get_aggregator(
    currency_manager: CurrencyManager = Depends(get_currency_manager),
) -> LedgerAggregator:
    return LedgerAggregator(currency_manager)


def get_statement_importer(
    transaction_store: TransactionStore = Depends(get_transaction_store),
    currency_manager: CurrencyManager = Depends(get_currency_manager),
) -> StatementImporter:
    return StatementImporter(transaction_store, currency_manager)


# =========================================================================
# StatementPoller (프로세스 단위, lifespan에서 설정)
# =========================================================================

# 은행 피드 poller는 동시 실행 방지 상태를 가지므로 프로세스에 하나만 존재
_statement_poller: StatementPoller | None = None


def set_statement_poller(poller: StatementPoller | None) -> None:
    """StatementPoller 설정

    Web 부트스트랩(lifespan) 시 호출하여 전역 인스턴스 설정.
    """
    global _statement_poller
    _statement_poller = poller


def get_statement_poller() -> StatementPoller | None:
    """StatementPoller 반환 (설정되지 않았으면 None)"""
    return _statement_poller
