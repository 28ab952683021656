"""
Ledger 타입 정의

Transaction, Category 데이터 구조.
모든 금액은 Decimal 사용 (DB에는 문자열로 저장).
"""

import uuid
from dataclasses import asdict, dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from typing import Any

from core.types import ReservedCategory
from core.utils.timezone import ensure_utc, now_utc, parse_iso


ZERO = Decimal("0")


@dataclass
class Transaction:
    """거래 (가변, 저장소 소유)

    항상 두 개의 (금액, 통화) 쌍을 가진다. 단일 통화 입력은 UI 편의일 뿐이며
    두 번째 쌍은 저장 시점에 채워진다 (환율 추정 실패 시 0).

    Attributes:
        id: 고유 ID (수동 입력: uuid4, import: 외부 ID에서 결정적 생성)
        date: 거래 시각 (UTC)
        category: 카테고리 라벨 (None이면 읽기 시 "Other")
        first_amount: 기본 금액
        first_currency_code: 기본 금액 통화
        second_amount: 보조 금액
        second_currency_code: 보조 금액 통화
        comment: 메모
    """

    first_amount: Decimal
    first_currency_code: str
    second_amount: Decimal = ZERO
    second_currency_code: str | None = None
    category: str | None = None
    comment: str = ""
    date: datetime = field(default_factory=now_utc)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self) -> None:
        self.date = ensure_utc(self.date)

    @property
    def valid_category(self) -> str:
        """표시용 카테고리 (없으면 "Other")"""
        return self.category or ReservedCategory.OTHER.value

    @property
    def exchange_rate(self) -> Decimal:
        """거래 자체의 환율 (first / second, second가 0이면 0)"""
        if self.second_amount == 0:
            return ZERO
        return self.first_amount / self.second_amount

    def snapshot(self) -> "Transaction":
        """현재 상태 복사본 (저장 실패 시 복원용)"""
        return replace(self)

    def restore(self, snapshot: "Transaction") -> None:
        """복사본 상태로 필드 복원"""
        for name, value in asdict(snapshot).items():
            setattr(self, name, value)

    def to_dict(self) -> dict[str, Any]:
        """직렬화 (금액은 문자열)"""
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "category": self.valid_category,
            "first_amount": str(self.first_amount),
            "first_currency_code": self.first_currency_code,
            "second_amount": str(self.second_amount),
            "second_currency_code": self.second_currency_code,
            "comment": self.comment,
        }

    @classmethod
    def from_row(cls, row: tuple[Any, ...]) -> "Transaction":
        """DB 행에서 생성

        컬럼 순서: id, date, category, first_amount, first_currency_code,
        second_amount, second_currency_code, comment
        """
        return cls(
            id=row[0],
            date=parse_iso(row[1]),
            category=row[2],
            first_amount=Decimal(row[3]),
            first_currency_code=row[4],
            second_amount=Decimal(row[5]) if row[5] is not None else ZERO,
            second_currency_code=row[6],
            comment=row[7] or "",
        )


@dataclass(frozen=True)
class Category:
    """카테고리

    Attributes:
        label: 고유 라벨
        color: 표시 색상 (hex, Ledger 계산과 무관)
    """

    label: str
    color: str

    @property
    def is_reserved(self) -> bool:
        """예약 카테고리 여부"""
        return self.label in {c.value for c in ReservedCategory}


@dataclass(frozen=True)
class MutationResult:
    """변경 작업 결과

    Attributes:
        ok: 저장 성공 여부
        transaction: 대상 거래 (삭제/실패 시 None일 수 있음)
        error: 실패 메시지
    """

    ok: bool
    transaction: Transaction | None = None
    error: str | None = None
