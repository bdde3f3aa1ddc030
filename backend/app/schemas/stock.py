from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional
from decimal import Decimal

from app.schemas.purchase_alert import PurchaseAlertView


class OrderLineItem(BaseModel):
    product_id: int
    quantity: Decimal = Field(..., gt=0)


class MaterialStockSnapshot(BaseModel):
    """Inventory state of one material, read fresh for every evaluation."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    code: Optional[str] = None
    unit: str = ""
    qty_on_hand: Decimal = Decimal("0")
    safety_stock: Decimal = Decimal("0")


class StockAnalysisResult(BaseModel):
    current_stock: Decimal
    safety_stock: Decimal
    required_qty: Decimal
    stock_after_order: Decimal
    is_below_safety: bool
    will_be_below_safety: bool
    is_out_of_stock: bool
    will_be_out_of_stock: bool
    needs_alert: bool
    shortage_amount: Decimal
    severity: str


class MaterialStockAnalysis(StockAnalysisResult):
    material_id: int
    material_name: str


class StockCheckReport(BaseModel):
    alerts: List[PurchaseAlertView] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    can_proceed: bool = True
    total_materials_needed: Dict[int, Decimal] = Field(default_factory=dict)
    stock_analysis: List[MaterialStockAnalysis] = Field(default_factory=list)


class StockCheckRequest(BaseModel):
    products: List[OrderLineItem] = Field(default_factory=list)
    order_id: Optional[int] = None


class MaterialStockStatus(BaseModel):
    material_id: int
    material_name: str
    current_stock: Decimal
    safety_stock: Decimal
    unit: str
    is_below_safety: bool
    severity: str
    status: str


class MaterialStockIssue(BaseModel):
    material_id: int
    material_name: str
    material_code: Optional[str] = None
    current_stock: Decimal
    safety_stock: Decimal
    unit: str
    severity: str
    status: str
    shortage_amount: Decimal
