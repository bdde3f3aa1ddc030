"""
Purchase Alerts Router: procurement workflow over stock alerts
"""
from fastapi import APIRouter, Depends
from typing import List, Optional

from app.dependencies import get_alert_service, get_current_user_id
from app.schemas.purchase_alert import (
    PurchaseAlertStatusUpdate,
    PurchaseAlertSummary,
    PurchaseAlertView,
)
from app.services.purchase_alert_service import PurchaseAlertService

router = APIRouter(prefix="/purchase-alerts", tags=["Purchase Alerts"])


@router.get("", response_model=List[PurchaseAlertView])
def list_purchase_alerts(
    status: Optional[str] = None,
    priority: Optional[str] = None,
    material_id: Optional[int] = None,
    order_id: Optional[int] = None,
    service: PurchaseAlertService = Depends(get_alert_service),
):
    return service.list_alerts(
        status=status, priority=priority, material_id=material_id, order_id=order_id,
    )


@router.get("/summary", response_model=PurchaseAlertSummary)
def purchase_alert_summary(service: PurchaseAlertService = Depends(get_alert_service)):
    return service.get_summary()


@router.get("/critical", response_model=List[PurchaseAlertView])
def critical_purchase_alerts(service: PurchaseAlertService = Depends(get_alert_service)):
    return service.get_critical_alerts()


@router.patch("/{alert_id}/status", response_model=PurchaseAlertView)
def update_purchase_alert_status(
    alert_id: int,
    payload: PurchaseAlertStatusUpdate,
    service: PurchaseAlertService = Depends(get_alert_service),
    user_id: Optional[int] = Depends(get_current_user_id),
):
    return service.update_status(alert_id, payload, user_id=user_id)
