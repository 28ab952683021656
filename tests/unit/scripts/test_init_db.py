"""
scripts/init_db.py 테스트
"""

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.storage.config_store import ConfigStore
from scripts.init_db import main, verify_schema


class TestInitDb:
    """DB 초기화 스크립트"""

    @pytest.mark.asyncio
    async def test_main_creates_schema_and_defaults(self, temp_dir: Path) -> None:
        db_path = temp_dir / "ledger.db"

        assert await main(db_path) is True

        async with SQLiteAdapter(db_path) as db:
            assert await db.table_exists("transactions") is True
            assert await ConfigStore(db).get_version("categories") == 1

    @pytest.mark.asyncio
    async def test_main_is_repeatable(self, temp_dir: Path) -> None:
        """재실행해도 기존 설정 버전 유지"""
        db_path = temp_dir / "ledger.db"

        await main(db_path)
        assert await main(db_path) is True

        async with SQLiteAdapter(db_path) as db:
            assert await ConfigStore(db).get_version("currency") == 1

    @pytest.mark.asyncio
    async def test_verify_schema_reports_missing_table(self) -> None:
        db = AsyncMock()
        db.table_exists.side_effect = lambda table: table != "config_store"

        assert await verify_schema(db) is False
