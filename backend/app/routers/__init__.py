# Routers package: Thin Controllers (SRP / DIP)
from app.routers import orders, materials, purchase_alerts

__all__ = [
    "orders",
    "materials",
    "purchase_alerts",
]
