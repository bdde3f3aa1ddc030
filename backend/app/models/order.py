from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import relationship

from app.database import Base


class Order(Base):
    __tablename__ = "orders"
    __table_args__ = (
        CheckConstraint(
            "status IN ('created', 'confirmed', 'need_material', 'processing', "
            "'completed', 'shipped', 'delivered', 'cancelled')",
            name="ck_orders_status",
        ),
        CheckConstraint(
            "priority IN ('low', 'medium', 'high', 'urgent')",
            name="ck_orders_priority",
        ),
        Index("ix_orders_status_active", "status", "is_active"),
    )

    id = Column(Integer, primary_key=True, index=True)
    order_number = Column(String(30), nullable=False, unique=True, index=True)
    status = Column(String(20), nullable=False, default="created")
    priority = Column(String(10), nullable=False, default="medium")
    due_date = Column(Date, nullable=False)
    customer_note = Column(Text, nullable=True)
    description = Column(Text, nullable=True)
    tailor_contact_id = Column(Integer, ForeignKey("contacts.id"), nullable=True)
    target_pcs = Column(Integer, nullable=False, default=0)
    completed_pcs = Column(Integer, nullable=False, default=0)
    user_id = Column(Integer, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    deleted_at = Column(DateTime, nullable=True)
    deleted_by = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    lines = relationship(
        "OrderProduct",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderProduct.id",
    )
    tailor = relationship("Contact")


class OrderProduct(Base):
    __tablename__ = "order_products"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    qty = Column(Numeric(12, 2), nullable=False)

    order = relationship("Order", back_populates="lines")
    product = relationship("Product")


class OrderStatusChange(Base):
    __tablename__ = "order_status_changes"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    old_status = Column(String(20), nullable=False)
    new_status = Column(String(20), nullable=False)
    changed_by = Column(Integer, nullable=True)
    note = Column(Text, nullable=True)
    changed_at = Column(DateTime, default=func.now())
