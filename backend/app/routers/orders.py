"""
Orders Router: Thin Controller (SRP / DIP)
"""
from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional

from app.dependencies import get_current_user_id, get_order_service, get_tailor_service
from app.schemas.order import (
    OrderCreate,
    OrderDeleteResponse,
    OrderListResponse,
    OrderResponse,
    OrderStatusChangeResponse,
    OrderStatusTransitions,
    OrderStatusUpdate,
    OrderUpdate,
    OrderWithStockResponse,
    TailorResponse,
)
from app.services.order_service import OrderService
from app.services.tailor_directory_service import TailorDirectoryService

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.get("", response_model=OrderListResponse)
def list_orders(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    status: Optional[str] = None,
    priority: Optional[str] = None,
    search: Optional[str] = None,
    service: OrderService = Depends(get_order_service),
):
    return service.list_orders(
        page=page, page_size=page_size, status=status, priority=priority, search=search,
    )


@router.get("/tailors", response_model=List[TailorResponse])
def list_tailors(service: TailorDirectoryService = Depends(get_tailor_service)):
    return service.get_tailors()


@router.delete("/tailors/cache")
def clear_tailors_cache(service: TailorDirectoryService = Depends(get_tailor_service)):
    service.clear_cache()
    return {"success": True, "message": "Tailors cache cleared"}


@router.post("", response_model=OrderWithStockResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    payload: OrderCreate,
    service: OrderService = Depends(get_order_service),
    user_id: Optional[int] = Depends(get_current_user_id),
):
    return service.create_order(payload, user_id=user_id)


@router.get("/{order_id}", response_model=OrderResponse)
def get_order(order_id: int, service: OrderService = Depends(get_order_service)):
    return service.get_order(order_id)


@router.put("/{order_id}", response_model=OrderWithStockResponse)
def update_order(
    order_id: int,
    payload: OrderUpdate,
    service: OrderService = Depends(get_order_service),
    user_id: Optional[int] = Depends(get_current_user_id),
):
    return service.update_order(order_id, payload, user_id=user_id)


@router.patch("/{order_id}/status", response_model=OrderResponse)
def update_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    service: OrderService = Depends(get_order_service),
    user_id: Optional[int] = Depends(get_current_user_id),
):
    return service.update_status(order_id, payload.status, user_id=user_id, note=payload.note)


@router.get("/{order_id}/status-transitions", response_model=OrderStatusTransitions)
def get_order_status_transitions(order_id: int, service: OrderService = Depends(get_order_service)):
    return service.get_status_transitions(order_id)


@router.get("/{order_id}/history", response_model=List[OrderStatusChangeResponse])
def get_order_status_history(order_id: int, service: OrderService = Depends(get_order_service)):
    return service.get_status_history(order_id)


@router.delete("/{order_id}", response_model=OrderDeleteResponse)
def delete_order(
    order_id: int,
    service: OrderService = Depends(get_order_service),
    user_id: Optional[int] = Depends(get_current_user_id),
):
    return service.delete_order(order_id, user_id=user_id)
