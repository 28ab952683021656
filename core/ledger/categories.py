"""
CategoryRegistry - 카테고리 라벨/색상 관리

ConfigStore("categories")에 {labels: [...], colors: {label: hex}} 형태로 저장.

이름 변경/삭제는 기존 거래의 category 필드까지 연쇄 변경되며,
거래 갱신과 라벨 목록 변경이 하나의 SQLite 트랜잭션으로 커밋된다.
저장 실패 시 둘 다 롤백되고 메모리 상태도 바뀌지 않는다.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import TYPE_CHECKING

from core.constants import Defaults
from core.errors import LedgerValidationError, NotFoundError
from core.ledger.types import Category
from core.types import PROTECTED_CATEGORIES, ReservedCategory

if TYPE_CHECKING:
    from core.storage.config_store import ConfigStore
    from core.storage.transaction_store import TransactionStore

logger = logging.getLogger(__name__)

CONFIG_KEY = "categories"


class CategoryRegistry:
    """카테고리 레지스트리

    Args:
        config_store: 설정 저장소 (라벨/색상 보관)
        transaction_store: 거래 저장소 (연쇄 변경 대상)

    사용 예시:
    ```python
    registry = CategoryRegistry(config_store, transaction_store)
    await registry.load()

    await registry.add("Groceries", "#00FF00")
    await registry.rename("Food", "Meals")
    await registry.delete("Electronics")  # 거래는 "Other"로 이동
    ```
    """

    def __init__(self, config_store: ConfigStore, transaction_store: TransactionStore):
        self.config_store = config_store
        self.transaction_store = transaction_store
        self._labels: list[str] = []
        self._colors: dict[str, str] = {}

    async def load(self) -> "CategoryRegistry":
        """ConfigStore에서 라벨/색상 로드"""
        value = await self.config_store.get(CONFIG_KEY)
        self._labels = list(value.get("labels", []))
        self._colors = dict(value.get("colors", {}))
        return self

    # -------------------------------------------------------------------------
    # 조회
    # -------------------------------------------------------------------------

    @property
    def labels(self) -> list[str]:
        """전체 라벨 (표시 순서)"""
        return list(self._labels)

    @property
    def selectable_labels(self) -> list[str]:
        """거래에 지정 가능한 라벨 ("All" 제외)"""
        return [label for label in self._labels if label != ReservedCategory.ALL.value]

    def categories(self) -> list[Category]:
        """Category 목록"""
        return [Category(label=label, color=self.color_for(label)) for label in self._labels]

    def color_for(self, label: str) -> str:
        """라벨 색상 (없으면 기본 회색)"""
        return self._colors.get(label, Defaults.CATEGORY_COLOR)

    def __contains__(self, label: object) -> bool:
        return label in self._labels

    # -------------------------------------------------------------------------
    # 변경
    # -------------------------------------------------------------------------

    @staticmethod
    def _normalize(label: str | None, field: str = "label") -> str:
        name = (label or "").strip()
        if not name:
            raise LedgerValidationError("카테고리 이름을 입력하세요", field=field)
        return name

    def _require_mutable(self, label: str) -> None:
        if label in PROTECTED_CATEGORIES:
            raise LedgerValidationError(
                f"예약 카테고리는 변경할 수 없습니다: '{label}'",
                field="label",
            )
        if label not in self._labels:
            raise NotFoundError(f"카테고리를 찾을 수 없습니다: '{label}'")

    async def _commit(self, labels: list[str], colors: dict[str, str]) -> bool:
        """라벨 목록 stage 후 거래 변경과 함께 커밋"""
        try:
            await self.config_store.stage(
                CONFIG_KEY,
                {"labels": labels, "colors": colors},
                updated_by="ledger:categories",
            )
        except sqlite3.Error as e:
            logger.error(f"카테고리 설정 저장 실패: {e}")
            await self.transaction_store.discard()
            return False

        return await self.transaction_store.save()

    async def add(self, label: str, color: str | None = None) -> bool:
        """카테고리 추가

        Raises:
            LedgerValidationError: 빈 이름 또는 중복
        """
        name = self._normalize(label)
        if name in self._labels:
            raise LedgerValidationError(f"이미 존재하는 카테고리입니다: '{name}'", field="label")

        labels = [*self._labels, name]
        colors = {**self._colors, name: color or Defaults.CATEGORY_COLOR}

        if not await self._commit(labels, colors):
            return False

        self._labels, self._colors = labels, colors
        logger.info(f"카테고리 추가: {name}")
        return True

    async def rename(self, old_label: str, new_label: str) -> bool:
        """카테고리 이름 변경 (거래 연쇄 변경, 색상 키 이동)

        Returns:
            성공 여부 (실패 시 거래/라벨 모두 변경 없음)

        Raises:
            LedgerValidationError: 빈 이름, 중복, 예약 카테고리
            NotFoundError: 기존 라벨 없음
        """
        self._require_mutable(old_label)
        name = self._normalize(new_label, field="new_label")
        if name == old_label:
            return True
        if name in self._labels or name in PROTECTED_CATEGORIES:
            raise LedgerValidationError(
                f"이미 존재하는 카테고리입니다: '{name}'",
                field="new_label",
            )

        labels = [name if label == old_label else label for label in self._labels]
        colors = {(name if label == old_label else label): c for label, c in self._colors.items()}

        try:
            moved = await self.transaction_store.reassign_category(old_label, name)
        except sqlite3.Error as e:
            logger.error(f"카테고리 이름 변경 실패: {e}")
            await self.transaction_store.discard()
            return False

        if not await self._commit(labels, colors):
            return False

        self._labels, self._colors = labels, colors
        logger.info(
            f"카테고리 이름 변경: {old_label} → {name}",
            extra={"transactions": moved},
        )
        return True

    async def delete(self, label: str) -> bool:
        """카테고리 삭제 (거래는 "Other"로 재지정)

        Returns:
            성공 여부

        Raises:
            LedgerValidationError: 예약 카테고리
            NotFoundError: 라벨 없음
        """
        self._require_mutable(label)

        labels = [item for item in self._labels if item != label]
        colors = {key: c for key, c in self._colors.items() if key != label}

        try:
            moved = await self.transaction_store.reassign_category(
                label, ReservedCategory.OTHER.value
            )
        except sqlite3.Error as e:
            logger.error(f"카테고리 삭제 실패: {e}")
            await self.transaction_store.discard()
            return False

        if not await self._commit(labels, colors):
            return False

        self._labels, self._colors = labels, colors
        logger.info(f"카테고리 삭제: {label}", extra={"transactions": moved})
        return True

    async def set_color(self, label: str, color: str) -> bool:
        """색상 변경"""
        if label not in self._labels:
            raise NotFoundError(f"카테고리를 찾을 수 없습니다: '{label}'")

        colors = {**self._colors, label: color}
        if not await self._commit(list(self._labels), colors):
            return False

        self._colors = colors
        return True
