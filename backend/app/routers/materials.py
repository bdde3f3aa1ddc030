"""
Materials Router: stock status and order stock checks
"""
from fastapi import APIRouter, Depends
from typing import List, Optional

from app.dependencies import get_current_user_id, get_stock_service
from app.schemas.stock import (
    MaterialStockIssue,
    MaterialStockStatus,
    StockCheckReport,
    StockCheckRequest,
)
from app.services.material_stock_service import MaterialStockService

router = APIRouter(prefix="/materials", tags=["Materials"])


@router.get("/stock-issues", response_model=List[MaterialStockIssue])
def materials_with_stock_issues(service: MaterialStockService = Depends(get_stock_service)):
    return service.get_materials_with_stock_issues()


@router.get("/{material_id}/status", response_model=MaterialStockStatus)
def material_stock_status(material_id: int, service: MaterialStockService = Depends(get_stock_service)):
    return service.check_material_status(material_id)


@router.post("/stock-check", response_model=StockCheckReport)
def check_stock(
    payload: StockCheckRequest,
    service: MaterialStockService = Depends(get_stock_service),
    user_id: Optional[int] = Depends(get_current_user_id),
):
    """Preview a stock check; alerts are only recorded when ``order_id`` names an active order."""
    return service.check_stock_for_order(payload.products, order_id=payload.order_id, user_id=user_id)
