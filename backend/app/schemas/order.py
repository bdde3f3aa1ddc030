from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional
from datetime import date, datetime
from decimal import Decimal

from app.schemas.purchase_alert import PurchaseAlertView
from app.schemas.stock import OrderLineItem

PRIORITY_PATTERN = "^(low|medium|high|urgent)$"


class OrderCreate(BaseModel):
    due_date: date
    customer_note: Optional[str] = None
    description: Optional[str] = None
    priority: str = Field("medium", pattern=PRIORITY_PATTERN)
    tailor_contact_id: Optional[int] = None
    products: List[OrderLineItem] = Field(..., min_length=1)


class OrderUpdate(BaseModel):
    due_date: Optional[date] = None
    customer_note: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = Field(None, pattern=PRIORITY_PATTERN)
    status: Optional[str] = None
    tailor_contact_id: Optional[int] = None
    completed_pcs: Optional[int] = Field(None, ge=0)
    products: Optional[List[OrderLineItem]] = Field(None, min_length=1)


class OrderStatusUpdate(BaseModel):
    status: str
    note: Optional[str] = Field(None, max_length=1000)


class OrderLineResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    product_id: int
    qty: Decimal


class OrderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    order_number: str
    status: str
    priority: str
    due_date: date
    customer_note: Optional[str] = None
    description: Optional[str] = None
    tailor_contact_id: Optional[int] = None
    target_pcs: int
    completed_pcs: int
    user_id: Optional[int] = None
    lines: List[OrderLineResponse] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class OrderListResponse(BaseModel):
    items: List[OrderResponse]
    total: int
    page: int
    page_size: int
    total_pages: int
    status_counts: Dict[str, int]
    priority_counts: Dict[str, int]


class StockResults(BaseModel):
    alerts: List[PurchaseAlertView]
    warnings: List[str]
    has_stock_issues: bool


class OrderWithStockResponse(BaseModel):
    success: bool = True
    message: str
    order: OrderResponse
    stock_results: Optional[StockResults] = None


class OrderStatusChangeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    old_status: str
    new_status: str
    changed_by: Optional[int] = None
    note: Optional[str] = None
    changed_at: Optional[datetime] = None


class OrderStatusTransitions(BaseModel):
    order_id: int
    status: str
    allowed: List[str]
    deletable: bool


class OrderDeleteResponse(BaseModel):
    success: bool = True
    message: str
    order_id: int
    order_number: str
    deleted_at: datetime


class TailorResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    whatsapp_phone: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    position: Optional[str] = None
