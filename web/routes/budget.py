"""
예산 라우트

월 예산 및 초기 잔고 설정 API
"""

from fastapi import APIRouter, Depends, HTTPException

from core.storage.config_store import ConfigStore
from web.dependencies import get_config_store
from web.models.requests import BudgetUpdateRequest
from web.models.responses import BudgetResponse

router = APIRouter(prefix="/api", tags=["Budget"])


@router.get("/budget", response_model=BudgetResponse)
async def get_budget(
    config_store: ConfigStore = Depends(get_config_store),
) -> BudgetResponse:
    """예산 설정 조회"""
    budget = await config_store.get("budget")
    return BudgetResponse(
        monthly_budget=budget["monthly_budget"],
        initial_balance=budget["initial_balance"],
    )


@router.put("/budget", response_model=BudgetResponse)
async def update_budget(
    request: BudgetUpdateRequest,
    config_store: ConfigStore = Depends(get_config_store),
) -> BudgetResponse:
    """예산 설정 변경 (지정한 필드만)"""
    budget = await config_store.get("budget", use_cache=False)

    if request.monthly_budget is not None:
        budget["monthly_budget"] = str(request.monthly_budget)
    if request.initial_balance is not None:
        budget["initial_balance"] = str(request.initial_balance)

    if not await config_store.set("budget", budget, updated_by="web"):
        raise HTTPException(status_code=500, detail="Failed to save budget config")

    return BudgetResponse(
        monthly_budget=budget["monthly_budget"],
        initial_balance=budget["initial_balance"],
    )
