"""
은행 명세서 1회 import

사용법:
    python -m scripts.import_statement
    python -m scripts.import_statement --from 2026-02-01 --to 2026-02-20
    python -m scripts.import_statement --delete-imported
"""

import argparse
import asyncio
import logging
from datetime import datetime
from pathlib import Path

# 프로젝트 루트를 Python 경로에 추가
import sys
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from adapters.monobank.rest_client import MonobankRestClient
from core.config.loader import get_settings
from core.currency.catalog import CurrencyConfig
from core.currency.manager import CurrencyManager
from core.ledger.importer import StatementImporter
from core.logging import setup_logging
from core.storage.config_store import ConfigStore, init_default_configs
from core.storage.transaction_store import TransactionStore
from core.utils.timezone import parse_iso

logger = logging.getLogger(__name__)


async def main(start: datetime | None, end: datetime | None, delete_imported: bool) -> int:
    settings = get_settings()

    async with SQLiteAdapter(settings.db_path) as db:
        await init_schema(db)
        await init_default_configs(db)

        currency = await ConfigStore(db).get("currency")
        importer = StatementImporter(
            TransactionStore(db),
            CurrencyManager(CurrencyConfig.from_dict(currency)),
        )

        if delete_imported:
            removed = await importer.delete_imported()
            logger.info(f"API 거래 {removed}건 삭제")
            return 0

        client = MonobankRestClient(
            token=settings.monobank_token,
            account=settings.monobank_account,
            timeout=settings.fetch_timeout_sec,
        )
        try:
            result = await importer.fetch_and_import(client, start, end)
        finally:
            await client.close()

    if not result.ok:
        logger.error(f"import 실패: {result.error} (retryable={result.retryable})")
        return 1

    logger.info(
        f"import 완료: 신규 {result.imported}건, "
        f"중복 {result.skipped_duplicates}건, 거부 {result.rejected}건"
    )
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Monobank 명세서를 Ledger로 import"
    )
    parser.add_argument(
        "--from",
        dest="start",
        type=parse_iso,
        default=None,
        help="시작 시각 (ISO 8601, 기본: 이번 달 1일)"
    )
    parser.add_argument(
        "--to",
        dest="end",
        type=parse_iso,
        default=None,
        help="종료 시각 (ISO 8601, 기본: 현재)"
    )
    parser.add_argument(
        "--delete-imported",
        action="store_true",
        help="import된 출금(API 카테고리) 전체 삭제"
    )
    args = parser.parse_args()

    setup_logging("feed")
    sys.exit(asyncio.run(main(args.start, args.end, args.delete_imported)))
