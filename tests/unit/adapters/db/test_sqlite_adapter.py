"""
SQLite 어댑터 테스트

SQLiteAdapter 및 관련 함수 테스트.
"""

import sqlite3
from pathlib import Path

import pytest
import pytest_asyncio

from adapters.db.sqlite_adapter import (
    SQLiteAdapter,
    get_db_path,
    create_connection,
    init_schema,
)
from core.constants import Paths


class TestGetDbPath:
    """get_db_path 테스트"""

    def test_default_path(self) -> None:
        """기본 경로"""
        path = get_db_path()

        assert path == Paths.LEDGER_DB
        assert isinstance(path, Path)

    def test_explicit_string_path(self) -> None:
        """문자열 경로"""
        path = get_db_path("data/other.db")

        assert path == Path("data/other.db")


class TestCreateConnection:
    """create_connection 테스트"""

    @pytest.mark.asyncio
    async def test_create_connection(self, tmp_path: Path) -> None:
        """연결 생성"""
        db_path = tmp_path / "test.db"

        conn = await create_connection(db_path)

        assert conn is not None

        # WAL 모드 확인
        cursor = await conn.execute("PRAGMA journal_mode")
        row = await cursor.fetchone()
        assert row[0].upper() == "WAL"

        await conn.close()

    @pytest.mark.asyncio
    async def test_creates_parent_directory(self, tmp_path: Path) -> None:
        """부모 디렉토리 생성"""
        db_path = tmp_path / "subdir" / "test.db"

        conn = await create_connection(db_path)

        assert db_path.parent.exists()

        await conn.close()


class TestSQLiteAdapter:
    """SQLiteAdapter 테스트"""

    @pytest_asyncio.fixture
    async def adapter(self, tmp_path: Path) -> SQLiteAdapter:
        """어댑터 픽스처"""
        db_path = tmp_path / "test.db"
        adapter = SQLiteAdapter(db_path)
        await adapter.connect()
        yield adapter
        await adapter.close()

    @pytest.mark.asyncio
    async def test_connect_and_close(self, tmp_path: Path) -> None:
        """연결 및 종료"""
        adapter = SQLiteAdapter(tmp_path / "test.db")

        assert adapter.is_connected is False

        await adapter.connect()
        assert adapter.is_connected is True

        await adapter.close()
        assert adapter.is_connected is False

    @pytest.mark.asyncio
    async def test_execute_without_connection_raises(self, tmp_path: Path) -> None:
        """연결 없이 실행 시 RuntimeError"""
        adapter = SQLiteAdapter(tmp_path / "test.db")

        with pytest.raises(RuntimeError):
            await adapter.execute("SELECT 1")

    @pytest.mark.asyncio
    async def test_fetchall(self, adapter: SQLiteAdapter) -> None:
        """전체 조회"""
        await adapter.execute("CREATE TABLE items (value TEXT)")
        await adapter.executemany(
            "INSERT INTO items (value) VALUES (?)",
            [("A",), ("B",), ("C",)],
        )
        await adapter.commit()

        rows = await adapter.fetchall("SELECT value FROM items ORDER BY value")

        assert [row[0] for row in rows] == ["A", "B", "C"]

    @pytest.mark.asyncio
    async def test_rollback_discards_uncommitted(self, adapter: SQLiteAdapter) -> None:
        """커밋 전 변경은 롤백으로 폐기"""
        await adapter.execute("CREATE TABLE rb (id INTEGER)")
        await adapter.commit()

        await adapter.execute("INSERT INTO rb (id) VALUES (1)")
        await adapter.rollback()

        rows = await adapter.fetchall("SELECT id FROM rb")
        assert rows == []

    @pytest.mark.asyncio
    async def test_transaction_rollback(self, adapter: SQLiteAdapter) -> None:
        """트랜잭션 롤백"""
        await adapter.execute("CREATE TABLE tx_test (id INTEGER)")
        await adapter.commit()

        with pytest.raises(ValueError):
            async with adapter.transaction() as conn:
                await conn.execute("INSERT INTO tx_test (id) VALUES (1)")
                raise ValueError("의도적 에러")

        rows = await adapter.fetchall("SELECT id FROM tx_test")
        assert len(rows) == 0

    @pytest.mark.asyncio
    async def test_context_manager(self, tmp_path: Path) -> None:
        """컨텍스트 매니저"""
        async with SQLiteAdapter(tmp_path / "ctx_test.db") as adapter:
            assert adapter.is_connected is True

        assert adapter.is_connected is False


class TestInitSchema:
    """init_schema 테스트"""

    @pytest.mark.asyncio
    async def test_init_schema_creates_tables(self, tmp_path: Path) -> None:
        """스키마 초기화 - 테이블 생성"""
        async with SQLiteAdapter(tmp_path / "schema_test.db") as adapter:
            await init_schema(adapter)

            assert await adapter.table_exists("transactions") is True
            assert await adapter.table_exists("config_store") is True

    @pytest.mark.asyncio
    async def test_init_schema_idempotent(self, tmp_path: Path) -> None:
        """스키마 초기화 멱등성 (여러 번 실행 가능)"""
        async with SQLiteAdapter(tmp_path / "idempotent_test.db") as adapter:
            await init_schema(adapter)
            await init_schema(adapter)

            assert await adapter.table_exists("transactions") is True

    @pytest.mark.asyncio
    async def test_transaction_id_is_primary_key(self, tmp_path: Path) -> None:
        """같은 거래 ID 중복 삽입 불가"""
        async with SQLiteAdapter(tmp_path / "pk_test.db") as adapter:
            await init_schema(adapter)

            insert = """
                INSERT INTO transactions (id, date, first_amount, first_currency_code)
                VALUES ('txn-1', '2026-02-01T00:00:00+00:00', '100', 'UAH')
            """
            await adapter.execute(insert)
            await adapter.commit()

            with pytest.raises(sqlite3.IntegrityError):
                await adapter.execute(insert)
