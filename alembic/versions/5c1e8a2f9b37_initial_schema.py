"""initial_schema

Revision ID: 5c1e8a2f9b37
Revises:
Create Date: 2026-10-19 09:12:44.318207

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from ebee.db.models import KENYAN_COUNTIES


# revision identifiers, used by Alembic.
revision: str = '5c1e8a2f9b37'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

user_type = sa.Enum(
    'customer', 'admin', 'finance_manager', 'inventory_manager', 'dispatch_manager',
    'service_manager', 'supplier', 'technician_manager', 'driver', name='user_type',
)
product_category = sa.Enum('bike', 'spare-part', 'accessory', 'helmet', 'service', name='product_category')
order_status = sa.Enum('Pending', 'Processing', 'Delivered', 'Cancelled', name='order_status')
payment_status = sa.Enum('Pending', 'Paid', 'Cancelled', name='payment_status')
rental_status = sa.Enum('pending', 'paid', 'cancelled', name='rental_status')
booking_status = sa.Enum('pending', 'confirmed', 'completed', 'cancelled', name='booking_status')
dispatch_status = sa.Enum('assigned', 'in_transit', 'delivered', name='dispatch_status')
change_type = sa.Enum('add', 'remove', 'adjust', name='change_type')
report_type = sa.Enum(
    'sales_summary', 'inventory_status', 'customer_analytics', 'product_performance',
    'feedback_analysis', 'rental_activity', 'financial_summary', 'custom', name='report_type',
)
report_format = sa.Enum('pdf', 'excel', 'csv', 'html', name='report_format')
report_period = sa.Enum('daily', 'weekly', 'monthly', 'quarterly', 'yearly', 'custom', name='report_period')
kenyan_county = sa.Enum(*KENYAN_COUNTIES, name='kenyan_county')

ALL_ENUMS = (
    user_type, product_category, order_status, payment_status, rental_status, booking_status,
    dispatch_status, change_type, report_type, report_format, report_period, kenyan_county,
)


def timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def fk(target, ondelete='CASCADE'):
    return sa.ForeignKey(target, ondelete=ondelete, onupdate='CASCADE')


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('phone_number', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('reset_token', sa.String(), nullable=True),
        sa.Column('reset_token_expires', sa.DateTime(timezone=True), nullable=True),
        sa.Column('is_approved', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('user_type', user_type, nullable=False, server_default='customer'),
        *timestamps(),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_reset_token', 'users', ['reset_token'])

    op.create_table(
        'products',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('category', product_category, nullable=False),
        sa.Column('stock_quantity', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('image_url', sa.String(), nullable=False),
        sa.Column('cloudinary_id', sa.String(), nullable=False),
        sa.Column('supplier_id', sa.Integer(), fk('users.id'), nullable=True),
        *timestamps(),
        sa.CheckConstraint('price >= 0', name='ck_products_price_non_negative'),
        sa.CheckConstraint('stock_quantity >= 0', name='ck_products_stock_non_negative'),
    )
    op.create_index('ix_products_id', 'products', ['id'])

    op.create_table(
        'user_addresses',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('county', kenyan_county, nullable=False),
        sa.Column('sub_county', sa.String(), nullable=True),
        sa.Column('ward', sa.String(), nullable=True),
        sa.Column('street', sa.String(), nullable=True),
        sa.Column('phone_number', sa.String(), nullable=False),
        sa.Column('postal_code', sa.String(), nullable=False),
        sa.Column('user_id', sa.Integer(), fk('users.id'), nullable=False),
        *timestamps(),
    )
    op.create_index('ix_user_addresses_id', 'user_addresses', ['id'])
    op.create_index('ix_user_addresses_user_id', 'user_addresses', ['user_id'])

    op.create_table(
        'carts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        *timestamps(),
    )
    op.create_index('ix_carts_id', 'carts', ['id'])
    op.create_index('ix_carts_user_id', 'carts', ['user_id'])

    op.create_table(
        'cart_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('cart_id', sa.Integer(), sa.ForeignKey('carts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('product_id', sa.Integer(), sa.ForeignKey('products.id', ondelete='CASCADE'), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='1'),
        *timestamps(),
        sa.CheckConstraint('quantity >= 1', name='ck_cart_items_quantity_positive'),
    )
    op.create_index('ix_cart_items_id', 'cart_items', ['id'])

    op.create_table(
        'orders',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), fk('users.id'), nullable=False),
        sa.Column('cart_id', sa.Integer(), fk('carts.id'), nullable=False),
        sa.Column('user_address_id', sa.Integer(), fk('user_addresses.id'), nullable=False),
        sa.Column('total_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('order_status', order_status, nullable=True, server_default='Pending'),
        sa.Column('payment_status', payment_status, nullable=True, server_default='Pending'),
        *timestamps(),
    )
    op.create_index('ix_orders_id', 'orders', ['id'])
    op.create_index('ix_orders_user_id', 'orders', ['user_id'])

    op.create_table(
        'order_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('order_id', sa.Integer(), fk('orders.id'), nullable=False),
        sa.Column('product_id', sa.Integer(), fk('products.id'), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        *timestamps(),
        sa.CheckConstraint('quantity >= 1', name='ck_order_items_quantity_positive'),
    )
    op.create_index('ix_order_items_id', 'order_items', ['id'])

    # rentals.fine_id is added once fines exists
    op.create_table(
        'rentals',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), fk('users.id'), nullable=False),
        sa.Column('product_id', sa.Integer(), fk('products.id'), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('rent_start', sa.DateTime(timezone=True), nullable=False),
        sa.Column('rent_end', sa.DateTime(timezone=True), nullable=False),
        sa.Column('fine_id', sa.Integer(), nullable=True),
        sa.Column('staff_id', sa.Integer(), fk('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('status', rental_status, nullable=False, server_default='pending'),
        *timestamps(),
    )
    op.create_index('ix_rentals_id', 'rentals', ['id'])

    op.create_table(
        'fines',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('reason', sa.String(), nullable=False),
        sa.Column('amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('user_id', sa.Integer(), fk('users.id'), nullable=False),
        sa.Column('rental_id', sa.Integer(), fk('rentals.id'), nullable=False),
        *timestamps(),
        sa.CheckConstraint('amount >= 0', name='ck_fines_amount_non_negative'),
    )
    op.create_index('ix_fines_id', 'fines', ['id'])
    op.create_foreign_key(
        'fk_rentals_fine_id', 'rentals', 'fines', ['fine_id'], ['id'],
        ondelete='SET NULL', onupdate='CASCADE',
    )

    op.create_table(
        'services',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        *timestamps(),
        sa.CheckConstraint('price >= 0', name='ck_services_price_non_negative'),
    )
    op.create_index('ix_services_id', 'services', ['id'])

    op.create_table(
        'bookings',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('service_id', sa.Integer(), sa.ForeignKey('services.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('assigned_to', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('status', booking_status, nullable=True, server_default='pending'),
        sa.Column('notes', sa.Text(), nullable=True),
        *timestamps(),
    )
    op.create_index('ix_bookings_id', 'bookings', ['id'])

    op.create_table(
        'dispatches',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('driver_id', sa.Integer(), fk('users.id'), nullable=False),
        sa.Column('order_id', sa.Integer(), fk('orders.id'), nullable=False),
        sa.Column('delivery_date', sa.Date(), nullable=True),
        sa.Column('status', dispatch_status, nullable=False, server_default='assigned'),
        *timestamps(),
    )
    op.create_index('ix_dispatches_id', 'dispatches', ['id'])
    op.create_index('ix_dispatches_order_id', 'dispatches', ['order_id'])

    op.create_table(
        'inventories',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('change_type', change_type, nullable=False),
        sa.Column('reason', sa.String(), nullable=False),
        sa.Column('product_id', sa.Integer(), fk('products.id'), nullable=False),
        sa.Column('order_id', sa.Integer(), fk('orders.id'), nullable=True),
        *timestamps(),
    )
    op.create_index('ix_inventories_id', 'inventories', ['id'])

    op.create_table(
        'payments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('amount', sa.Numeric(10, 2), nullable=True),
        sa.Column('phone_number', sa.String(), nullable=True),
        sa.Column('status', sa.String(), nullable=True),
        sa.Column('is_approved', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('reference', sa.String(), nullable=True),
        sa.Column('checkout_request_id', sa.String(), nullable=True),
        sa.Column('mpesa_receipt_number', sa.String(), nullable=True),
        sa.Column('user_id', sa.Integer(), fk('users.id'), nullable=False),
        sa.Column('order_id', sa.Integer(), fk('orders.id'), nullable=True),
        *timestamps(),
    )
    op.create_index('ix_payments_id', 'payments', ['id'])
    op.create_index('ix_payments_reference', 'payments', ['reference'])
    op.create_index('ix_payments_checkout_request_id', 'payments', ['checkout_request_id'])

    op.create_table(
        'feedbacks',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.Column('user_id', sa.Integer(), fk('users.id'), nullable=False),
        sa.Column('product_id', sa.Integer(), fk('products.id'), nullable=False),
        *timestamps(),
        sa.CheckConstraint('rating BETWEEN 1 AND 5', name='ck_feedbacks_rating_range'),
    )
    op.create_index('ix_feedbacks_id', 'feedbacks', ['id'])

    op.create_table(
        'reports',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), fk('users.id'), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('type', report_type, nullable=True, server_default='custom'),
        sa.Column('content', sa.Text(), nullable=False, server_default='{}'),
        sa.Column('format', report_format, nullable=False, server_default='pdf'),
        sa.Column('filters', sa.Text(), nullable=True),
        sa.Column('period', report_period, nullable=True, server_default='monthly'),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('file_url', sa.String(), nullable=True),
        sa.Column('is_generated', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('download_count', sa.Integer(), nullable=False, server_default='0'),
        *timestamps(),
    )
    op.create_index('ix_reports_id', 'reports', ['id'])

    op.create_table(
        'contacts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        *timestamps(),
    )
    op.create_index('ix_contacts_id', 'contacts', ['id'])


def downgrade() -> None:
    op.drop_constraint('fk_rentals_fine_id', 'rentals', type_='foreignkey')
    for table in (
        'contacts', 'reports', 'feedbacks', 'payments', 'inventories', 'dispatches', 'bookings',
        'services', 'fines', 'rentals', 'order_items', 'orders', 'cart_items', 'carts',
        'user_addresses', 'products', 'users',
    ):
        op.drop_table(table)

    bind = op.get_bind()
    for enum in ALL_ENUMS:
        enum.drop(bind, checkfirst=True)
