from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, String, func

from app.database import Base


class Contact(Base):
    __tablename__ = "contacts"
    __table_args__ = (
        CheckConstraint(
            "type IN ('tailor', 'supplier', 'customer')",
            name="ck_contacts_type",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    type = Column(String(20), nullable=False, default="tailor", index=True)
    phone = Column(String(30), nullable=True)
    whatsapp_phone = Column(String(30), nullable=True)
    email = Column(String(200), nullable=True)
    company = Column(String(200), nullable=True)
    position = Column(String(100), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())
