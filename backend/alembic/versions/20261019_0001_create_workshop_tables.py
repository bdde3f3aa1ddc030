"""create workshop tables

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 09:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "materials",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("code", sa.String(length=50), nullable=False),
        sa.Column("unit", sa.String(length=20), nullable=False),
        sa.Column("qty_on_hand", sa.Numeric(12, 2), nullable=False),
        sa.Column("safety_stock", sa.Numeric(12, 2), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("safety_stock >= 0", name="ck_materials_safety_stock_non_negative"),
    )
    op.create_index("ix_materials_code", "materials", ["code"], unique=True)

    op.create_table(
        "products",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("code", sa.String(length=50), nullable=True),
        sa.Column("unit", sa.String(length=20), nullable=False),
        sa.Column("material_id", sa.Integer(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["material_id"], ["materials.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_products_code", "products", ["code"], unique=True)
    op.create_index("ix_products_material_id", "products", ["material_id"], unique=False)

    op.create_table(
        "contacts",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("type", sa.String(length=20), nullable=False),
        sa.Column("phone", sa.String(length=30), nullable=True),
        sa.Column("whatsapp_phone", sa.String(length=30), nullable=True),
        sa.Column("email", sa.String(length=200), nullable=True),
        sa.Column("company", sa.String(length=200), nullable=True),
        sa.Column("position", sa.String(length=100), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("type IN ('tailor', 'supplier', 'customer')", name="ck_contacts_type"),
    )
    op.create_index("ix_contacts_type", "contacts", ["type"], unique=False)

    op.create_table(
        "orders",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("order_number", sa.String(length=30), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("priority", sa.String(length=10), nullable=False),
        sa.Column("due_date", sa.Date(), nullable=False),
        sa.Column("customer_note", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("tailor_contact_id", sa.Integer(), nullable=True),
        sa.Column("target_pcs", sa.Integer(), nullable=False),
        sa.Column("completed_pcs", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("deleted_at", sa.DateTime(), nullable=True),
        sa.Column("deleted_by", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["tailor_contact_id"], ["contacts.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "status IN ('created', 'confirmed', 'need_material', 'processing', "
            "'completed', 'shipped', 'delivered', 'cancelled')",
            name="ck_orders_status",
        ),
        sa.CheckConstraint("priority IN ('low', 'medium', 'high', 'urgent')", name="ck_orders_priority"),
    )
    op.create_index("ix_orders_order_number", "orders", ["order_number"], unique=True)
    op.create_index("ix_orders_status_active", "orders", ["status", "is_active"], unique=False)

    op.create_table(
        "order_products",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("order_id", sa.Integer(), nullable=False),
        sa.Column("product_id", sa.Integer(), nullable=False),
        sa.Column("qty", sa.Numeric(12, 2), nullable=False),
        sa.ForeignKeyConstraint(["order_id"], ["orders.id"]),
        sa.ForeignKeyConstraint(["product_id"], ["products.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_order_products_order_id", "order_products", ["order_id"], unique=False)
    op.create_index("ix_order_products_product_id", "order_products", ["product_id"], unique=False)

    op.create_table(
        "order_status_changes",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("order_id", sa.Integer(), nullable=False),
        sa.Column("old_status", sa.String(length=20), nullable=False),
        sa.Column("new_status", sa.String(length=20), nullable=False),
        sa.Column("changed_by", sa.Integer(), nullable=True),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("changed_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["order_id"], ["orders.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_order_status_changes_order_id", "order_status_changes", ["order_id"], unique=False)

    op.create_table(
        "material_purchase_alerts",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("material_id", sa.Integer(), nullable=False),
        sa.Column("order_id", sa.Integer(), nullable=True),
        sa.Column("current_stock", sa.Numeric(12, 2), nullable=False),
        sa.Column("safety_stock", sa.Numeric(12, 2), nullable=False),
        sa.Column("required_stock", sa.Numeric(12, 2), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("priority", sa.String(length=10), nullable=False),
        sa.Column("alert_date", sa.DateTime(), nullable=False),
        sa.Column("order_date", sa.DateTime(), nullable=True),
        sa.Column("expected_date", sa.DateTime(), nullable=True),
        sa.Column("resolved_at", sa.DateTime(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_by", sa.Integer(), nullable=True),
        sa.Column("resolved_by", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["material_id"], ["materials.id"]),
        sa.ForeignKeyConstraint(["order_id"], ["orders.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "status IN ('pending', 'ordered', 'fulfilled', 'cancelled')",
            name="ck_purchase_alert_status",
        ),
        sa.CheckConstraint(
            "priority IN ('low', 'medium', 'high', 'critical')",
            name="ck_purchase_alert_priority",
        ),
    )
    op.create_index("ix_material_purchase_alerts_material_id", "material_purchase_alerts", ["material_id"], unique=False)
    op.create_index("ix_material_purchase_alerts_order_id", "material_purchase_alerts", ["order_id"], unique=False)
    op.create_index("ix_purchase_alerts_material_status", "material_purchase_alerts", ["material_id", "status"], unique=False)
    op.create_index("ix_purchase_alerts_order_date", "material_purchase_alerts", ["order_id", "alert_date"], unique=False)
    op.create_index("ix_purchase_alerts_status_priority", "material_purchase_alerts", ["status", "priority"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_purchase_alerts_status_priority", table_name="material_purchase_alerts")
    op.drop_index("ix_purchase_alerts_order_date", table_name="material_purchase_alerts")
    op.drop_index("ix_purchase_alerts_material_status", table_name="material_purchase_alerts")
    op.drop_index("ix_material_purchase_alerts_order_id", table_name="material_purchase_alerts")
    op.drop_index("ix_material_purchase_alerts_material_id", table_name="material_purchase_alerts")
    op.drop_table("material_purchase_alerts")
    op.drop_index("ix_order_status_changes_order_id", table_name="order_status_changes")
    op.drop_table("order_status_changes")
    op.drop_index("ix_order_products_product_id", table_name="order_products")
    op.drop_index("ix_order_products_order_id", table_name="order_products")
    op.drop_table("order_products")
    op.drop_index("ix_orders_status_active", table_name="orders")
    op.drop_index("ix_orders_order_number", table_name="orders")
    op.drop_table("orders")
    op.drop_index("ix_contacts_type", table_name="contacts")
    op.drop_table("contacts")
    op.drop_index("ix_products_material_id", table_name="products")
    op.drop_index("ix_products_code", table_name="products")
    op.drop_table("products")
    op.drop_index("ix_materials_code", table_name="materials")
    op.drop_table("materials")
