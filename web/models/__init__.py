"""
Web 모델 패키지

Pydantic 스키마 정의
"""

from web.models.requests import (
    BaseCurrencyUpdateRequest,
    BudgetUpdateRequest,
    CategoryCreateRequest,
    CategoryUpdateRequest,
    ImportRequest,
    TransactionRequest,
)
from web.models.responses import (
    BudgetResponse,
    BudgetSummaryResponse,
    CategoryResponse,
    CategorySummaryResponse,
    CurrenciesResponse,
    CurrencyResponse,
    DeleteImportedResponse,
    HealthResponse,
    ImportResponse,
    TransactionListResponse,
    TransactionResponse,
)

__all__ = [
    # Requests
    "TransactionRequest",
    "CategoryCreateRequest",
    "CategoryUpdateRequest",
    "BaseCurrencyUpdateRequest",
    "BudgetUpdateRequest",
    "ImportRequest",
    # Responses
    "HealthResponse",
    "TransactionResponse",
    "TransactionListResponse",
    "CategoryResponse",
    "BudgetSummaryResponse",
    "CategorySummaryResponse",
    "CurrencyResponse",
    "CurrenciesResponse",
    "BudgetResponse",
    "ImportResponse",
    "DeleteImportedResponse",
]
