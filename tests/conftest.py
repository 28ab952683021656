"""
pytest 공통 fixture 정의

임시 디렉토리, secrets.yaml, 인메모리 SQLite, 거래 생성 헬퍼
"""

import tempfile
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import AsyncGenerator, Callable

import pytest
import pytest_asyncio

from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from core.currency.catalog import CurrencyConfig
from core.currency.manager import CurrencyManager
from core.ledger.types import Transaction
from core.storage.config_store import ConfigStore, init_default_configs
from core.storage.transaction_store import TransactionStore


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_secrets_file(temp_dir: Path) -> Path:
    """테스트용 secrets.yaml 파일 생성"""
    secrets_content = """# 테스트용 secrets.yaml
monobank:
  token: "test_token_abcde"
  account: "0"
  timeout_sec: 15

storage:
  db_path: "data/test.db"
"""
    secrets_path = temp_dir / "secrets.yaml"
    secrets_path.write_text(secrets_content, encoding="utf-8")
    return secrets_path


@pytest.fixture
def temp_secrets_file_minimal(temp_dir: Path) -> Path:
    """토큰만 있는 secrets.yaml (나머지는 기본값)"""
    secrets_path = temp_dir / "secrets_minimal.yaml"
    secrets_path.write_text('monobank:\n  token: "only_token"\n', encoding="utf-8")
    return secrets_path


@pytest_asyncio.fixture
async def db() -> AsyncGenerator[SQLiteAdapter, None]:
    """임시 인메모리 DB (스키마 + 기본 설정)"""
    adapter = SQLiteAdapter(":memory:")
    await adapter.connect()
    await init_schema(adapter)
    await init_default_configs(adapter)
    yield adapter
    await adapter.close()


@pytest.fixture
def config_store(db: SQLiteAdapter) -> ConfigStore:
    """ConfigStore 인스턴스"""
    return ConfigStore(db)


@pytest.fixture
def transaction_store(db: SQLiteAdapter) -> TransactionStore:
    """TransactionStore 인스턴스"""
    return TransactionStore(db)


@pytest.fixture
def currency_manager() -> CurrencyManager:
    """UAH / PLN 기준 통화"""
    return CurrencyManager(CurrencyConfig("UAH", "PLN"))


@pytest.fixture
def make_txn() -> Callable[..., Transaction]:
    """거래 생성 헬퍼

    사용 예시:
        make_txn("100", "25", day=1, category="Food")
    """

    def _make(
        first: str,
        second: str = "0",
        day: int = 1,
        category: str | None = "Food",
        first_code: str = "UAH",
        second_code: str | None = "PLN",
        hour: int = 12,
    ) -> Transaction:
        return Transaction(
            first_amount=Decimal(first),
            first_currency_code=first_code,
            second_amount=Decimal(second),
            second_currency_code=second_code,
            category=category,
            date=datetime(2026, 2, day, hour, 0, tzinfo=timezone.utc),
        )

    return _make
