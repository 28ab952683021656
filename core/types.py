"""
타입 정의 모듈

Enum 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class ReservedCategory(str, Enum):
    """예약 카테고리

    이름 변경/삭제가 불가능한 시스템 카테고리.
    """

    ALL = "All"  # 전체 필터 (집계용, 거래에 저장되지 않음)
    REPLENISHMENT = "Replenishment"  # 입금 (지출 합계에서 제외)
    TRANSFER_OUT = "Transfer-out"  # 다른 계좌로 이체 (지출/입금 모두에서 제외)
    API = "API"  # 은행 API로 수집된 출금
    OTHER = "Other"  # 기본 카테고리 (카테고리 없음/삭제 시)


# 지출 합계에서 제외되는 카테고리
NON_EXPENSE_CATEGORIES: frozenset[str] = frozenset({
    ReservedCategory.REPLENISHMENT.value,
    ReservedCategory.TRANSFER_OUT.value,
    ReservedCategory.API.value,
})

# 이름 변경/삭제 불가 카테고리
PROTECTED_CATEGORIES: frozenset[str] = frozenset(c.value for c in ReservedCategory)


# 기본 카테고리 (표시 순서, 색상)
DEFAULT_CATEGORIES: tuple[tuple[str, str], ...] = (
    (ReservedCategory.ALL.value, "#E6E6E6"),
    (ReservedCategory.REPLENISHMENT.value, "#00B333"),
    (ReservedCategory.API.value, "#6666E6"),
    ("Food", "#FF9900"),
    ("Housing", "#007AFF"),
    ("Health & Beauty", "#FF69B5"),
    ("Internet services", "#00FAFF"),
    ("Transport", "#00CC66"),
    ("Entertainment & Sport", "#9400D4"),
    ("Household supplies", "#808080"),
    ("Charity", "#BDFAC9"),
    ("Electronics", "#008080"),
    (ReservedCategory.TRANSFER_OUT.value, "#B3334D"),
    (ReservedCategory.OTHER.value, "#4A0082"),
)


class CategorySortType(str, Enum):
    """카테고리 정렬 방식"""

    COUNT = "count"  # 거래 수 내림차순
    ALPHABETICAL = "alphabetical"  # 알파벳순
    EXPENSES = "expenses"  # 지출 합계 내림차순 (기준 통화 1)
