"""
Web API 테스트 fixture

임시 DB 파일 + get_db 오버라이드 + Mock 은행 피드 poller
"""

from pathlib import Path
from typing import AsyncGenerator

import httpx
import pytest_asyncio

from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from adapters.mock.bank_client import MockBankFeedClient
from core.storage.config_store import ConfigStore, init_default_configs
from core.storage.transaction_store import TransactionStore
from feed.statement_poller import StatementPoller
from web.app import app
from web.dependencies import get_db, set_statement_poller


@pytest_asyncio.fixture
async def db_path(tmp_path: Path) -> Path:
    """스키마와 기본 설정이 준비된 DB 파일"""
    path = tmp_path / "web_test.db"
    async with SQLiteAdapter(path) as db:
        await init_schema(db)
        await init_default_configs(db)
    return path


@pytest_asyncio.fixture
async def client(db_path: Path) -> AsyncGenerator[httpx.AsyncClient, None]:
    """요청마다 새 연결을 여는 테스트 클라이언트 (lifespan 미실행)"""

    async def _get_test_db() -> AsyncGenerator[SQLiteAdapter, None]:
        async with SQLiteAdapter(db_path) as db:
            yield db

    app.dependency_overrides[get_db] = _get_test_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def bank_client() -> MockBankFeedClient:
    return MockBankFeedClient()


@pytest_asyncio.fixture
async def poller(db_path: Path, bank_client: MockBankFeedClient) -> AsyncGenerator[StatementPoller, None]:
    """전용 연결을 쓰는 StatementPoller 등록"""
    feed_db = SQLiteAdapter(db_path)
    await feed_db.connect()
    statement_poller = StatementPoller(bank_client, ConfigStore(feed_db), TransactionStore(feed_db))
    await statement_poller.initialize()
    set_statement_poller(statement_poller)
    yield statement_poller
    set_statement_poller(None)
    await feed_db.close()
