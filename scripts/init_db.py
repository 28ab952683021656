"""
DB 초기화 (스키마 + 기본 설정)

사용법:
    python -m scripts.init_db
    python -m scripts.init_db --db-path data/test.db
"""

import argparse
import asyncio
import logging
from pathlib import Path

# 프로젝트 루트를 Python 경로에 추가
import sys
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from adapters.db.sqlite_adapter import SQLiteAdapter, get_db_path, init_schema
from core.storage.config_store import ConfigStore, init_default_configs
from core.storage.transaction_store import TransactionStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


REQUIRED_TABLES = ("transactions", "config_store")


async def verify_schema(db: SQLiteAdapter) -> bool:
    """필수 테이블 존재 확인"""
    for table in REQUIRED_TABLES:
        if not await db.table_exists(table):
            logger.error(f"테이블 누락: {table}")
            return False
        logger.info(f"테이블 확인: {table} ✓")
    return True


async def main(db_path: Path) -> bool:
    logger.info(f"DB 초기화: {db_path}")

    async with SQLiteAdapter(db_path) as db:
        await init_schema(db)
        await init_default_configs(db)

        if not await verify_schema(db):
            return False

        config_store = ConfigStore(db)
        configs = await config_store.get_all()
        versions = {key: await config_store.get_version(key) for key in configs}
        count = await TransactionStore(db).count()

    logger.info(
        "설정 키: " + ", ".join(f"{key}(v{versions[key]})" for key in sorted(configs))
    )
    logger.info(f"기존 거래 수: {count}")
    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Ledger DB 스키마 및 기본 설정 초기화"
    )
    parser.add_argument(
        "--db-path",
        type=Path,
        default=None,
        help="DB 파일 경로 (기본: data/monthbudget.db)"
    )
    args = parser.parse_args()

    ok = asyncio.run(main(get_db_path(args.db_path)))
    sys.exit(0 if ok else 1)
