"""
카테고리 라우트

카테고리 조회/추가/이름 변경/삭제 API
이름 변경/삭제는 기존 거래까지 연쇄 반영
"""

from fastapi import APIRouter, Depends, HTTPException, Path

from core.ledger.categories import CategoryRegistry
from web.dependencies import get_category_registry
from web.models.requests import CategoryCreateRequest, CategoryUpdateRequest
from web.models.responses import CategoryResponse

router = APIRouter(prefix="/api", tags=["Categories"])


def _to_response(registry: CategoryRegistry, label: str) -> CategoryResponse:
    category = next(c for c in registry.categories() if c.label == label)
    return CategoryResponse(label=category.label, color=category.color, reserved=category.is_reserved)


@router.get("/categories", response_model=list[CategoryResponse])
async def list_categories(
    registry: CategoryRegistry = Depends(get_category_registry),
) -> list[CategoryResponse]:
    """카테고리 목록 (표시 순서)"""
    return [
        CategoryResponse(label=c.label, color=c.color, reserved=c.is_reserved)
        for c in registry.categories()
    ]


@router.post("/categories", response_model=CategoryResponse, status_code=201)
async def add_category(
    request: CategoryCreateRequest,
    registry: CategoryRegistry = Depends(get_category_registry),
) -> CategoryResponse:
    """카테고리 추가 (빈 이름/중복 거부)"""
    if not await registry.add(request.label, request.color):
        raise HTTPException(status_code=500, detail="Failed to save category")

    return _to_response(registry, request.label.strip())


@router.put("/categories/{label}", response_model=CategoryResponse)
async def update_category(
    request: CategoryUpdateRequest,
    label: str = Path(..., description="카테고리 라벨"),
    registry: CategoryRegistry = Depends(get_category_registry),
) -> CategoryResponse:
    """카테고리 이름/색상 변경

    이름 변경 시 해당 카테고리의 모든 거래도 함께 변경 (원자적).
    """
    current = label

    if request.new_label is not None:
        if not await registry.rename(label, request.new_label):
            raise HTTPException(status_code=500, detail="Failed to rename category")
        current = request.new_label.strip()

    if request.color is not None:
        if not await registry.set_color(current, request.color):
            raise HTTPException(status_code=500, detail="Failed to update category color")

    if current not in registry:
        raise HTTPException(status_code=404, detail=f"Category not found: {label}")

    return _to_response(registry, current)


@router.delete("/categories/{label}", status_code=204)
async def delete_category(
    label: str = Path(..., description="카테고리 라벨"),
    registry: CategoryRegistry = Depends(get_category_registry),
) -> None:
    """카테고리 삭제 (거래는 "Other"로 재지정)"""
    if not await registry.delete(label):
        raise HTTPException(status_code=500, detail="Failed to delete category")
