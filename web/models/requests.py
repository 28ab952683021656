"""
요청 스키마 (Pydantic)

Web API 요청 데이터 검증
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class TransactionRequest(BaseModel):
    """거래 생성/수정 요청

    second_amount가 없거나 0이면 보조 금액은 환율 추정으로 채워진다.
    """

    first_amount: Decimal = Field(..., description="기본 금액")
    first_currency_code: str | None = Field(
        default=None,
        description="기본 금액 통화 (None이면 base_currency_1)",
    )
    second_amount: Decimal | None = Field(default=None, description="보조 금액 (None이면 추정)")
    second_currency_code: str | None = Field(default=None, description="보조 금액 통화")
    category: str = Field(..., description="카테고리 라벨")
    comment: str = Field(default="", description="메모")
    date: datetime | None = Field(default=None, description="거래 시각 (None이면 현재/기존 값)")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "first_amount": "1000",
                    "first_currency_code": "UAH",
                    "category": "Food",
                    "comment": "Groceries",
                },
                {
                    "first_amount": "100",
                    "first_currency_code": "UAH",
                    "second_amount": "25",
                    "second_currency_code": "PLN",
                    "category": "Transport",
                },
            ]
        }
    }


class CategoryCreateRequest(BaseModel):
    """카테고리 추가 요청"""

    label: str = Field(..., description="카테고리 이름")
    color: str | None = Field(default=None, description="표시 색상 (hex, 기본 회색)")


class CategoryUpdateRequest(BaseModel):
    """카테고리 변경 요청 (이름 변경 및/또는 색상 변경)"""

    new_label: str | None = Field(default=None, description="새 이름")
    color: str | None = Field(default=None, description="새 색상 (hex)")


class BaseCurrencyUpdateRequest(BaseModel):
    """기준 통화 변경 요청"""

    base_currency_1: str = Field(..., description="기본 통화")
    base_currency_2: str = Field(..., description="보조 통화")


class BudgetUpdateRequest(BaseModel):
    """예산 설정 변경 요청"""

    monthly_budget: Decimal | None = Field(default=None, description="월 예산")
    initial_balance: Decimal | None = Field(default=None, description="초기 잔고")


class ImportRequest(BaseModel):
    """은행 명세서 import 요청 (기간 미지정 시 마지막 폴링 이후)"""

    start: datetime | None = Field(default=None, description="조회 시작 시각")
    end: datetime | None = Field(default=None, description="조회 종료 시각")
