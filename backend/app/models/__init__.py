from app.models.material import Material
from app.models.product import Product
from app.models.contact import Contact
from app.models.order import Order, OrderProduct, OrderStatusChange
from app.models.purchase_alert import PurchaseAlert

__all__ = [
    "Material",
    "Product",
    "Contact",
    "Order",
    "OrderProduct",
    "OrderStatusChange",
    "PurchaseAlert",
]
