# Repository Layer: Data Access (Repository Pattern, GoF)
from app.repositories.base import BaseRepository
from app.repositories.material_repository import MaterialRepository
from app.repositories.product_repository import ProductRepository
from app.repositories.contact_repository import ContactRepository
from app.repositories.order_repository import OrderRepository
from app.repositories.purchase_alert_repository import PurchaseAlertRepository

__all__ = [
    "BaseRepository",
    "MaterialRepository",
    "ProductRepository",
    "ContactRepository",
    "OrderRepository",
    "PurchaseAlertRepository",
]
