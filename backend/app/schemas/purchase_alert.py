from pydantic import BaseModel, Field
from typing import Dict, Optional
from datetime import datetime
from decimal import Decimal


class PurchaseAlertView(BaseModel):
    id: int
    material_id: int
    material_name: str
    material_code: Optional[str] = None
    order_id: Optional[int] = None
    current_stock: Decimal
    safety_stock: Decimal
    required_stock: Decimal
    priority: str
    status: str
    unit: str
    notes: Optional[str] = None
    alert_date: Optional[datetime] = None
    expected_date: Optional[datetime] = None
    is_overdue: bool
    alert_age: int


class PurchaseAlertStatusUpdate(BaseModel):
    status: str = Field(..., pattern="^(ordered|fulfilled|cancelled)$")
    expected_date: Optional[datetime] = None
    notes: Optional[str] = Field(None, max_length=1000)


class PurchaseAlertSummary(BaseModel):
    total: int
    by_status: Dict[str, int]
    by_priority: Dict[str, int]
    critical: int
