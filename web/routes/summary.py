"""
요약 라우트

예산/잔고 요약 및 카테고리별 요약 API
집계는 요청마다 조회된 거래 목록으로 다시 계산
"""

from datetime import datetime
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Query

from core.currency.manager import CurrencyManager
from core.ledger.aggregator import LedgerAggregator
from core.ledger.categories import CategoryRegistry
from core.storage.config_store import ConfigStore
from core.storage.transaction_store import TransactionStore
from core.types import CategorySortType, ReservedCategory
from web.dependencies import (
    get_aggregator,
    get_category_registry,
    get_config_store,
    get_currency_manager,
    get_transaction_store,
)
from web.models.responses import BudgetSummaryResponse, CategorySummaryResponse

router = APIRouter(prefix="/api", tags=["Summary"])

# 카테고리 순위에서 제외되는 라벨
RANKING_EXCLUDED = frozenset({
    ReservedCategory.ALL.value,
    ReservedCategory.REPLENISHMENT.value,
    ReservedCategory.API.value,
})


def _resolve_currency(currency: str | None, manager: CurrencyManager) -> str:
    if currency is None:
        return manager.base_currency_1
    if not manager.config.catalog.is_known(currency):
        raise HTTPException(status_code=422, detail=f"Unknown currency: {currency}")
    return currency


@router.get("/summary", response_model=BudgetSummaryResponse)
async def get_summary(
    currency: str | None = Query(None, description="대상 통화 (기본 base_currency_1)"),
    start: datetime | None = Query(None, description="시작 시각 (포함)"),
    end: datetime | None = Query(None, description="종료 시각 (제외)"),
    store: TransactionStore = Depends(get_transaction_store),
    config_store: ConfigStore = Depends(get_config_store),
    manager: CurrencyManager = Depends(get_currency_manager),
    aggregator: LedgerAggregator = Depends(get_aggregator),
) -> BudgetSummaryResponse:
    """예산 요약 (지출/입금/이체/예상 잔고/실제 잔고)"""
    target = _resolve_currency(currency, manager)
    transactions = await store.query(start=start, end=end, descending=False)
    budget = await config_store.get("budget")

    summary = aggregator.budget_summary(
        Decimal(budget["monthly_budget"]),
        Decimal(budget["initial_balance"]),
        transactions,
        target,
    )
    overall = aggregator.overall_average_exchange_rate(transactions)
    return BudgetSummaryResponse.from_summary(summary, str(overall))


@router.get("/summary/categories", response_model=list[CategorySummaryResponse])
async def get_category_summaries(
    sort: CategorySortType = Query(CategorySortType.COUNT, description="정렬 방식"),
    start: datetime | None = Query(None, description="시작 시각 (포함)"),
    end: datetime | None = Query(None, description="종료 시각 (제외)"),
    store: TransactionStore = Depends(get_transaction_store),
    registry: CategoryRegistry = Depends(get_category_registry),
    aggregator: LedgerAggregator = Depends(get_aggregator),
) -> list[CategorySummaryResponse]:
    """카테고리별 요약 (정렬: count / alphabetical / expenses)"""
    transactions = await store.query(start=start, end=end, descending=False)
    labels = [label for label in registry.labels if label not in RANKING_EXCLUDED]

    ranked = aggregator.rank_categories(labels, transactions, sort)
    return [
        CategorySummaryResponse.from_summary(
            aggregator.category_summary(label, transactions),
            registry.color_for(label),
        )
        for label in ranked
    ]
