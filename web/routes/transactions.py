"""
거래 라우트

거래 조회/생성/수정/삭제 API
"""

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from core.ledger.service import TransactionService
from core.storage.transaction_store import SORTABLE_FIELDS, TransactionStore
from web.dependencies import get_transaction_service, get_transaction_store
from web.models.requests import TransactionRequest
from web.models.responses import TransactionListResponse, TransactionResponse

router = APIRouter(prefix="/api", tags=["Transactions"])


@router.get("/transactions", response_model=TransactionListResponse)
async def list_transactions(
    start: datetime | None = Query(None, description="시작 시각 (포함)"),
    end: datetime | None = Query(None, description="종료 시각 (제외)"),
    category: str | None = Query(None, description="카테고리 필터"),
    sort_by: str = Query("date", description="정렬 기준 (date/category/first_amount/second_amount)"),
    descending: bool = Query(True, description="내림차순 여부"),
    limit: int = Query(100, ge=1, le=1000, description="조회 개수"),
    offset: int = Query(0, ge=0, description="시작 위치"),
    store: TransactionStore = Depends(get_transaction_store),
) -> TransactionListResponse:
    """거래 목록 조회"""
    if sort_by not in SORTABLE_FIELDS:
        raise HTTPException(status_code=422, detail=f"Unsupported sort field: {sort_by}")

    transactions = await store.query(
        sort_by=sort_by,
        descending=descending,
        start=start,
        end=end,
        category=category,
    )

    return TransactionListResponse(
        items=[
            TransactionResponse.from_transaction(txn)
            for txn in transactions[offset:offset + limit]
        ],
        total=len(transactions),
    )


@router.get("/transactions/{transaction_id}", response_model=TransactionResponse)
async def get_transaction(
    transaction_id: str = Path(..., description="거래 ID"),
    store: TransactionStore = Depends(get_transaction_store),
) -> TransactionResponse:
    """거래 조회"""
    txn = await store.get(transaction_id)
    if txn is None:
        raise HTTPException(status_code=404, detail=f"Transaction not found: {transaction_id}")
    return TransactionResponse.from_transaction(txn)


@router.post("/transactions", response_model=TransactionResponse, status_code=201)
async def create_transaction(
    request: TransactionRequest,
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionResponse:
    """거래 생성

    보조 금액이 없거나 0이면 현재 시각 기준 최근접 거래 환율로 추정.
    """
    result = await service.create(
        first_amount=request.first_amount,
        first_currency_code=request.first_currency_code,
        second_amount=request.second_amount,
        second_currency_code=request.second_currency_code,
        category=request.category,
        comment=request.comment,
        date=request.date,
    )

    if not result.ok or result.transaction is None:
        raise HTTPException(status_code=500, detail=result.error or "Failed to save transaction")

    return TransactionResponse.from_transaction(result.transaction)


@router.put("/transactions/{transaction_id}", response_model=TransactionResponse)
async def update_transaction(
    request: TransactionRequest,
    transaction_id: str = Path(..., description="거래 ID"),
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionResponse:
    """거래 수정

    보조 금액이 없거나 0이면 거래 날짜 기준 최근접 거래 환율로 추정.
    """
    result = await service.update(
        transaction_id,
        first_amount=request.first_amount,
        first_currency_code=request.first_currency_code,
        second_amount=request.second_amount,
        second_currency_code=request.second_currency_code,
        category=request.category,
        comment=request.comment,
        date=request.date,
    )

    if not result.ok or result.transaction is None:
        raise HTTPException(status_code=500, detail=result.error or "Failed to save transaction")

    return TransactionResponse.from_transaction(result.transaction)


@router.delete("/transactions/{transaction_id}", status_code=204)
async def delete_transaction(
    transaction_id: str = Path(..., description="거래 ID"),
    service: TransactionService = Depends(get_transaction_service),
) -> None:
    """거래 삭제"""
    result = await service.delete(transaction_id)

    if not result.ok:
        raise HTTPException(status_code=500, detail=result.error or "Failed to delete transaction")
