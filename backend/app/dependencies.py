"""
Shared FastAPI dependencies.
"""
from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.services.material_stock_service import MaterialStockService
from app.services.order_service import OrderService
from app.services.purchase_alert_service import PurchaseAlertService
from app.services.tailor_directory_service import TailorDirectoryService
from app.utils.cache import TTLCache


def get_current_user_id(x_user_id: Optional[int] = Header(None)) -> Optional[int]:
    """Acting user for audit columns; requests without the header are anonymous."""
    return x_user_id


def get_tailor_cache(request: Request) -> TTLCache:
    return request.app.state.tailor_cache


def get_stock_service(db: Session = Depends(get_db)) -> MaterialStockService:
    return MaterialStockService(db)


def get_alert_service(db: Session = Depends(get_db)) -> PurchaseAlertService:
    return PurchaseAlertService(db)


def get_order_service(
    db: Session = Depends(get_db),
    cache: TTLCache = Depends(get_tailor_cache),
) -> OrderService:
    return OrderService(db, tailor_cache=cache)


def get_tailor_service(
    db: Session = Depends(get_db),
    cache: TTLCache = Depends(get_tailor_cache),
) -> TailorDirectoryService:
    return TailorDirectoryService(db, cache)
