"""
ConfigStore - 런타임 설정 저장소

config_store 테이블을 통해 사용자가 변경 가능한 설정 관리.

설정 키 구조:
- "currency": 기준 통화 (base_currency_1, base_currency_2)
- "budget": 예산 설정 (monthly_budget, initial_balance)
- "categories": 카테고리 목록 및 색상 (labels, colors)
- "poller_<name>_last_poll": 은행 피드 poller 마지막 폴링 시간
"""

import copy
import json
import logging
from datetime import datetime, timezone
from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import Defaults
from core.types import DEFAULT_CATEGORIES

logger = logging.getLogger(__name__)


# 기본 설정값
DEFAULT_CONFIGS: dict[str, dict[str, Any]] = {
    "currency": {
        "base_currency_1": Defaults.BASE_CURRENCY_1,
        "base_currency_2": Defaults.BASE_CURRENCY_2,
    },
    "budget": {
        # Decimal 정밀도 유지를 위해 문자열로 저장
        "monthly_budget": Defaults.MONTHLY_BUDGET,
        "initial_balance": Defaults.INITIAL_BALANCE,
    },
    "categories": {
        "labels": [label for label, _ in DEFAULT_CATEGORIES],
        "colors": {label: color for label, color in DEFAULT_CATEGORIES},
    },
}


class ConfigStore:
    """설정 저장소

    config_store 테이블을 읽고 쓰는 클래스.

    Args:
        db: SQLiteAdapter 인스턴스

    사용 예시:
    ```python
    async with SQLiteAdapter(db_path) as db:
        config_store = ConfigStore(db)

        currency = await config_store.get("currency")
        base_1 = currency.get("base_currency_1", "UAH")

        await config_store.set("currency", {"base_currency_1": "UAH", "base_currency_2": "EUR"})
    ```
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db
        self._cache: dict[str, dict[str, Any]] = {}
        self._cache_version: dict[str, int] = {}

    async def get(self, key: str, use_cache: bool = True) -> dict[str, Any]:
        """설정 조회

        Args:
            key: 설정 키 (currency, budget, categories 등)
            use_cache: 캐시 사용 여부 (기본 True)

        Returns:
            설정 값 (dict 복사본). 없으면 기본값 반환.
        """
        if use_cache and key in self._cache:
            return copy.deepcopy(self._cache[key])

        try:
            row = await self.db.fetchone(
                """
                SELECT value_json, version
                FROM config_store
                WHERE config_key = ?
                """,
                (key,),
            )

            if row:
                value = json.loads(row[0]) if isinstance(row[0], str) else row[0]
                version = row[1]

                self._cache[key] = value
                self._cache_version[key] = version

                return copy.deepcopy(value)

        except Exception as e:
            logger.warning(f"Failed to get config '{key}': {e}")

        return copy.deepcopy(DEFAULT_CONFIGS.get(key, {}))

    async def get_version(self, key: str) -> int:
        """설정 버전 조회 (없으면 0)"""
        row = await self.db.fetchone(
            "SELECT version FROM config_store WHERE config_key = ?",
            (key,),
        )
        return int(row[0]) if row else 0

    async def stage(
        self,
        key: str,
        value: dict[str, Any],
        updated_by: str = "ledger:system",
    ) -> None:
        """설정 UPSERT (커밋하지 않음)

        다른 변경과 함께 하나의 트랜잭션으로 커밋할 때 사용.
        예외는 호출자에게 전파.
        """
        now = datetime.now(timezone.utc).isoformat()
        value_json = json.dumps(value, ensure_ascii=False)

        await self.db.execute(
            """
            INSERT INTO config_store (config_key, value_json, version, updated_by, created_at, updated_at)
            VALUES (?, ?, 1, ?, ?, ?)
            ON CONFLICT(config_key) DO UPDATE SET
                value_json = excluded.value_json,
                version = config_store.version + 1,
                updated_by = excluded.updated_by,
                updated_at = excluded.updated_at
            """,
            (key, value_json, updated_by, now, now),
        )

        # 캐시 무효화
        self._cache.pop(key, None)
        self._cache_version.pop(key, None)

    async def set(
        self,
        key: str,
        value: dict[str, Any],
        updated_by: str = "ledger:system",
    ) -> bool:
        """설정 저장 (UPSERT + 커밋)

        Args:
            key: 설정 키
            value: 설정 값
            updated_by: 업데이트 주체

        Returns:
            성공 여부
        """
        try:
            await self.stage(key, value, updated_by)
            await self.db.commit()

            # poller 상태는 너무 자주 발생하므로 표시하지 않음
            if not key.startswith("poller_"):
                logger.info(f"Config '{key}' updated by {updated_by}")
            return True

        except Exception as e:
            logger.error(f"Failed to set config '{key}': {e}")
            await self.db.rollback()
            return False

    async def get_all(self) -> dict[str, dict[str, Any]]:
        """모든 설정 조회

        Returns:
            {키: 값} 딕셔너리
        """
        result: dict[str, dict[str, Any]] = {}

        try:
            rows = await self.db.fetchall(
                """
                SELECT config_key, value_json
                FROM config_store
                ORDER BY config_key
                """
            )

            for row in rows:
                key = row[0]
                value = json.loads(row[1]) if isinstance(row[1], str) else row[1]
                result[key] = value

        except Exception as e:
            logger.warning(f"Failed to get all configs: {e}")

        return result

    async def ensure_defaults(self) -> None:
        """기본 설정이 없으면 생성

        앱 시작 시 호출하여 필수 설정이 존재하도록 보장.
        """
        for key, default_value in DEFAULT_CONFIGS.items():
            row = await self.db.fetchone(
                "SELECT 1 FROM config_store WHERE config_key = ?",
                (key,),
            )
            if not row:
                await self.set(key, default_value, updated_by="ledger:init")
                logger.info(f"Created default config: {key}")


async def init_default_configs(db: SQLiteAdapter) -> None:
    """기본 설정 초기화

    웹/스크립트 시작 시 호출하여 기본 설정이 존재하도록 보장.

    Args:
        db: SQLiteAdapter 인스턴스
    """
    config_store = ConfigStore(db)
    await config_store.ensure_defaults()
