from app.schemas.purchase_alert import PurchaseAlertView, PurchaseAlertStatusUpdate, PurchaseAlertSummary
from app.schemas.stock import (
    OrderLineItem,
    MaterialStockSnapshot,
    StockAnalysisResult,
    MaterialStockAnalysis,
    StockCheckReport,
    StockCheckRequest,
    MaterialStockStatus,
    MaterialStockIssue,
)
from app.schemas.order import (
    OrderCreate,
    OrderUpdate,
    OrderStatusUpdate,
    OrderResponse,
    OrderListResponse,
    StockResults,
    OrderWithStockResponse,
    OrderStatusChangeResponse,
    OrderStatusTransitions,
    OrderDeleteResponse,
    TailorResponse,
)
