"""
통화 라우트

통화 카탈로그 조회 및 기준 통화 변경 API
"""

from fastapi import APIRouter, Depends, HTTPException

from core.currency.catalog import CurrencyConfig
from core.storage.config_store import ConfigStore
from web.dependencies import get_config_store, get_currency_config
from web.models.requests import BaseCurrencyUpdateRequest
from web.models.responses import CurrenciesResponse, CurrencyResponse

router = APIRouter(prefix="/api", tags=["Currencies"])


def _to_response(config: CurrencyConfig) -> CurrenciesResponse:
    return CurrenciesResponse(
        base_currency_1=config.base_currency_1,
        base_currency_2=config.base_currency_2,
        currencies=[
            CurrencyResponse(code=info.code, symbol=info.symbol, numeric_code=info.numeric_code)
            for info in config.catalog.all()
        ],
    )


@router.get("/currencies", response_model=CurrenciesResponse)
async def get_currencies(
    currency_config: CurrencyConfig = Depends(get_currency_config),
) -> CurrenciesResponse:
    """통화 목록 및 현재 기준 통화"""
    return _to_response(currency_config)


@router.put("/currencies/base", response_model=CurrenciesResponse)
async def update_base_currencies(
    request: BaseCurrencyUpdateRequest,
    config_store: ConfigStore = Depends(get_config_store),
) -> CurrenciesResponse:
    """기준 통화 변경 (알 수 없는 코드/같은 통화는 422)"""
    config = CurrencyConfig(
        base_currency_1=request.base_currency_1,
        base_currency_2=request.base_currency_2,
    )

    if not await config_store.set("currency", config.to_dict(), updated_by="web"):
        raise HTTPException(status_code=500, detail="Failed to save currency config")

    return _to_response(config)
