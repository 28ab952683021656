"""
은행 import 라우트

POST /api/import   - 명세서 조회 후 import (동시에 하나만)
DELETE /api/import - import된 출금(API 카테고리) 전체 삭제
"""

from fastapi import APIRouter, Depends, HTTPException

from core.ledger.importer import StatementImporter
from feed.statement_poller import StatementPoller
from web.dependencies import get_statement_importer, get_statement_poller
from web.models.requests import ImportRequest
from web.models.responses import DeleteImportedResponse, ImportResponse

router = APIRouter(prefix="/api", tags=["Import"])


@router.post("/import", response_model=ImportResponse)
async def run_import(
    request: ImportRequest | None = None,
    poller: StatementPoller | None = Depends(get_statement_poller),
) -> ImportResponse:
    """은행 명세서 import

    - 409: 이미 조회 중
    - 500: 저장 실패
    - 502: 조회 실패 (재시도 불가, 예: 잘못된 토큰)
    - 503: 은행 피드 미설정 또는 재시도 가능한 실패 (타임아웃, 429, 5xx)
    """
    if poller is None:
        raise HTTPException(status_code=503, detail="Bank feed is not configured")

    request = request or ImportRequest()

    if poller.is_running:
        raise HTTPException(status_code=409, detail="Import already in progress")

    result = await poller.poll(since=request.start, until=request.end)

    if result.get("skipped"):
        raise HTTPException(status_code=409, detail="Import already in progress")

    error = result.get("error")
    if error is not None:
        if result.get("failed_at") == "storage":
            raise HTTPException(status_code=500, detail=error)
        status_code = 503 if result.get("retryable") else 502
        raise HTTPException(status_code=status_code, detail=error)

    return ImportResponse(
        ok=True,
        imported=result.get("imported", 0),
        skipped_duplicates=result.get("skipped_duplicates", 0),
        rejected=result.get("rejected", 0),
    )


@router.delete("/import", response_model=DeleteImportedResponse)
async def delete_imported(
    importer: StatementImporter = Depends(get_statement_importer),
) -> DeleteImportedResponse:
    """import된 출금 전체 삭제"""
    removed = await importer.delete_imported()
    return DeleteImportedResponse(removed=removed)
