"""
응답 스키마 (Pydantic)

Web API 응답 데이터 직렬화
금액은 Decimal 정밀도 유지를 위해 문자열로 반환
"""

from datetime import datetime

from pydantic import BaseModel, Field

from core.ledger.aggregator import BudgetSummary, CategorySummary
from core.ledger.types import Transaction


class HealthResponse(BaseModel):
    """헬스 체크 응답"""

    status: str = Field(default="ok", description="서비스 상태")
    version: str = Field(..., description="API 버전")
    timestamp: datetime = Field(..., description="응답 시간 (UTC)")
    bank_feed: str = Field(..., description="은행 피드 상태 (disabled/configured/ok/error)")
    bank_client: str | None = Field(default=None, description="은행 고객 이름 (check_bank 시)")


class TransactionResponse(BaseModel):
    """거래 응답"""

    id: str = Field(..., description="거래 ID")
    date: datetime = Field(..., description="거래 시각 (UTC)")
    category: str = Field(..., description="카테고리")
    first_amount: str = Field(..., description="기본 금액")
    first_currency_code: str = Field(..., description="기본 금액 통화")
    second_amount: str = Field(..., description="보조 금액")
    second_currency_code: str | None = Field(default=None, description="보조 금액 통화")
    comment: str = Field(default="", description="메모")
    exchange_rate: str = Field(..., description="거래 환율 (first / second)")

    @classmethod
    def from_transaction(cls, txn: Transaction) -> "TransactionResponse":
        return cls(
            id=txn.id,
            date=txn.date,
            category=txn.valid_category,
            first_amount=str(txn.first_amount),
            first_currency_code=txn.first_currency_code,
            second_amount=str(txn.second_amount),
            second_currency_code=txn.second_currency_code,
            comment=txn.comment,
            exchange_rate=str(txn.exchange_rate),
        )


class TransactionListResponse(BaseModel):
    """거래 목록 응답"""

    items: list[TransactionResponse] = Field(default_factory=list, description="거래 목록")
    total: int = Field(..., description="필터 적용 후 전체 수")


class CategoryResponse(BaseModel):
    """카테고리 응답"""

    label: str = Field(..., description="라벨")
    color: str = Field(..., description="표시 색상")
    reserved: bool = Field(..., description="예약 카테고리 여부 (변경/삭제 불가)")


class BudgetSummaryResponse(BaseModel):
    """예산 요약 응답"""

    currency: str
    monthly_budget: str
    initial_balance: str
    total_expenses: str
    total_replenishment: str
    total_to_other_account: str
    expected_balance: str
    actual_balance: str
    overall_average_rate: str = Field(..., description="카테고리 평균 환율들의 평균")

    @classmethod
    def from_summary(cls, summary: BudgetSummary, overall_average_rate: str) -> "BudgetSummaryResponse":
        return cls(
            currency=summary.currency,
            monthly_budget=str(summary.monthly_budget),
            initial_balance=str(summary.initial_balance),
            total_expenses=str(summary.total_expenses),
            total_replenishment=str(summary.total_replenishment),
            total_to_other_account=str(summary.total_to_other_account),
            expected_balance=str(summary.expected_balance),
            actual_balance=str(summary.actual_balance),
            overall_average_rate=overall_average_rate,
        )


class CategorySummaryResponse(BaseModel):
    """카테고리별 요약 응답"""

    category: str
    color: str
    transaction_count: int
    total_base_1: str
    total_base_2: str
    average_rate: str

    @classmethod
    def from_summary(cls, summary: CategorySummary, color: str) -> "CategorySummaryResponse":
        return cls(
            category=summary.category,
            color=color,
            transaction_count=summary.transaction_count,
            total_base_1=str(summary.total_base_1),
            total_base_2=str(summary.total_base_2),
            average_rate=str(summary.average_rate),
        )


class CurrencyResponse(BaseModel):
    """통화 정보 응답"""

    code: str
    symbol: str
    numeric_code: int | None = None


class CurrenciesResponse(BaseModel):
    """통화 설정 응답"""

    base_currency_1: str
    base_currency_2: str
    currencies: list[CurrencyResponse] = Field(default_factory=list)


class BudgetResponse(BaseModel):
    """예산 설정 응답"""

    monthly_budget: str
    initial_balance: str


class ImportResponse(BaseModel):
    """import 결과 응답"""

    ok: bool
    imported: int = 0
    skipped_duplicates: int = 0
    rejected: int = 0
    error: str | None = None
    retryable: bool = False


class DeleteImportedResponse(BaseModel):
    """API 거래 일괄 삭제 응답"""

    removed: int
