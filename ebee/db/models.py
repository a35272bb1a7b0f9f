import enum

from sqlalchemy import (
    Boolean, CheckConstraint, Column, Date, DateTime, Enum, ForeignKey, Integer,
    Numeric, String, Text, func,
)
from sqlalchemy.orm import relationship

from ebee.db.database import Base


class UserType(str, enum.Enum):
    customer = "customer"
    admin = "admin"
    finance_manager = "finance_manager"
    inventory_manager = "inventory_manager"
    dispatch_manager = "dispatch_manager"
    service_manager = "service_manager"
    supplier = "supplier"
    technician_manager = "technician_manager"
    driver = "driver"


class ProductCategory(str, enum.Enum):
    bike = "bike"
    spare_part = "spare-part"
    accessory = "accessory"
    helmet = "helmet"
    service = "service"


class OrderStatus(str, enum.Enum):
    pending = "Pending"
    processing = "Processing"
    delivered = "Delivered"
    cancelled = "Cancelled"


class PaymentStatus(str, enum.Enum):
    pending = "Pending"
    paid = "Paid"
    cancelled = "Cancelled"


class RentalStatus(str, enum.Enum):
    pending = "pending"
    paid = "paid"
    cancelled = "cancelled"


class BookingStatus(str, enum.Enum):
    pending = "pending"
    confirmed = "confirmed"
    completed = "completed"
    cancelled = "cancelled"


class DispatchStatus(str, enum.Enum):
    assigned = "assigned"
    in_transit = "in_transit"
    delivered = "delivered"


class ChangeType(str, enum.Enum):
    add = "add"
    remove = "remove"
    adjust = "adjust"


class ReportType(str, enum.Enum):
    sales_summary = "sales_summary"
    inventory_status = "inventory_status"
    customer_analytics = "customer_analytics"
    product_performance = "product_performance"
    feedback_analysis = "feedback_analysis"
    rental_activity = "rental_activity"
    financial_summary = "financial_summary"
    custom = "custom"


class ReportFormat(str, enum.Enum):
    pdf = "pdf"
    excel = "excel"
    csv = "csv"
    html = "html"


class ReportPeriod(str, enum.Enum):
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"
    quarterly = "quarterly"
    yearly = "yearly"
    custom = "custom"


KENYAN_COUNTIES = (
    "Baringo", "Bomet", "Bungoma", "Busia", "Elgeyo-Marakwet",
    "Embu", "Garissa", "Homa Bay", "Isiolo", "Kajiado",
    "Kakamega", "Kericho", "Kiambu", "Kilifi", "Kirinyaga",
    "Kisii", "Kisumu", "Kitui", "Kwale", "Laikipia",
    "Lamu", "Machakos", "Makueni", "Mandera", "Marsabit",
    "Meru", "Migori", "Mombasa", "Murang'a", "Nairobi",
    "Nakuru", "Nandi", "Narok", "Nyamira", "Nyandarua",
    "Nyeri", "Samburu", "Siaya", "Taita-Taveta", "Tana River",
    "Tharaka-Nithi", "Trans Nzoia", "Turkana", "Uasin Gishu",
    "Vihiga", "Wajir", "West Pokot",
)


def _enum_column_type(enum_cls, name):
    # Persist the enum values ("spare-part", "Pending"), not the member names
    return Enum(
        enum_cls,
        name=name,
        values_callable=lambda members: [m.value for m in members],
        create_constraint=True,
        validate_strings=True,
    )


def _money():
    return Numeric(10, 2, asdecimal=False)


class TimestampMixin:
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class User(TimestampMixin, Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    phone_number = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    reset_token = Column(String, nullable=True, index=True)
    reset_token_expires = Column(DateTime(timezone=True), nullable=True)
    is_approved = Column(Boolean, nullable=False, default=False)
    user_type = Column(_enum_column_type(UserType, "user_type"), nullable=False, default=UserType.customer)

    # Children go with the user; the database runs the ON DELETE rules
    orders = relationship("Order", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    feedbacks = relationship("Feedback", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    addresses = relationship("UserAddress", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    payments = relationship("Payment", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    # Owned services survive the owner (SET NULL)
    services = relationship("Service", back_populates="owner", passive_deletes=True)


class Product(TimestampMixin, Base):
    __tablename__ = "products"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    price = Column(_money(), nullable=False)
    category = Column(_enum_column_type(ProductCategory, "product_category"), nullable=False)
    stock_quantity = Column(Integer, nullable=False, default=0)
    image_url = Column(String, nullable=False)
    cloudinary_id = Column(String, nullable=False)
    supplier_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=True)

    supplier = relationship("User")
    feedbacks = relationship(
        "Feedback", back_populates="product", cascade="all, delete-orphan",
        passive_deletes=True, order_by="Feedback.id",
    )

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        CheckConstraint("stock_quantity >= 0", name="ck_products_stock_non_negative"),
    )


class Cart(TimestampMixin, Base):
    __tablename__ = "carts"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    user = relationship("User")
    items = relationship(
        "CartItem", back_populates="cart", cascade="all, delete-orphan",
        passive_deletes=True, order_by="CartItem.id",
    )


class CartItem(TimestampMixin, Base):
    __tablename__ = "cart_items"
    id = Column(Integer, primary_key=True, index=True)
    cart_id = Column(Integer, ForeignKey("carts.id", ondelete="CASCADE"), nullable=False)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)

    cart = relationship("Cart", back_populates="items")
    product = relationship("Product")

    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_cart_items_quantity_positive"),
    )


class Order(TimestampMixin, Base):
    __tablename__ = "orders"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False, index=True)
    cart_id = Column(Integer, ForeignKey("carts.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False)
    user_address_id = Column(
        Integer, ForeignKey("user_addresses.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False
    )
    total_price = Column(_money(), nullable=False)
    order_status = Column(_enum_column_type(OrderStatus, "order_status"), default=OrderStatus.pending)
    payment_status = Column(_enum_column_type(PaymentStatus, "payment_status"), default=PaymentStatus.pending)

    user = relationship("User", back_populates="orders")
    cart = relationship("Cart")
    user_address = relationship("UserAddress")
    items = relationship(
        "OrderItem", back_populates="order", cascade="all, delete-orphan",
        passive_deletes=True, order_by="OrderItem.id",
    )

    @property
    def computed_total_price(self):
        return round(sum(item.price * item.quantity for item in self.items), 2)


class OrderItem(TimestampMixin, Base):
    __tablename__ = "order_items"
    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    price = Column(_money(), nullable=False)  # price at purchase

    order = relationship("Order", back_populates="items")
    product = relationship("Product")

    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_order_items_quantity_positive"),
    )


class Fine(TimestampMixin, Base):
    __tablename__ = "fines"
    id = Column(Integer, primary_key=True, index=True)
    reason = Column(String, nullable=False)
    amount = Column(_money(), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False)
    rental_id = Column(Integer, ForeignKey("rentals.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False)

    user = relationship("User")
    rental = relationship("Rental", foreign_keys=[rental_id])

    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_fines_amount_non_negative"),
    )


class Rental(TimestampMixin, Base):
    __tablename__ = "rentals"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False)
    price = Column(_money(), nullable=False)
    rent_start = Column(DateTime(timezone=True), nullable=False)
    rent_end = Column(DateTime(timezone=True), nullable=False)
    # fines.rental_id points back here, so this edge is added after both tables exist
    fine_id = Column(
        Integer,
        ForeignKey("fines.id", ondelete="SET NULL", onupdate="CASCADE", use_alter=True, name="fk_rentals_fine_id"),
        nullable=True,
    )
    staff_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL", onupdate="CASCADE"), nullable=True)
    status = Column(_enum_column_type(RentalStatus, "rental_status"), nullable=False, default=RentalStatus.pending)

    user = relationship("User", foreign_keys=[user_id])
    staff = relationship("User", foreign_keys=[staff_id])
    product = relationship("Product")
    fine = relationship("Fine", foreign_keys=[fine_id], post_update=True)


class Service(TimestampMixin, Base):
    __tablename__ = "services"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    price = Column(_money(), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    owner = relationship("User", back_populates="services")
    bookings = relationship("Booking", back_populates="service", cascade="all, delete-orphan", passive_deletes=True)

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_services_price_non_negative"),
    )


class Booking(TimestampMixin, Base):
    __tablename__ = "bookings"
    id = Column(Integer, primary_key=True, index=True)
    service_id = Column(Integer, ForeignKey("services.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    assigned_to = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    status = Column(_enum_column_type(BookingStatus, "booking_status"), default=BookingStatus.pending)
    notes = Column(Text, nullable=True)

    service = relationship("Service", back_populates="bookings")
    user = relationship("User", foreign_keys=[user_id])
    technician = relationship("User", foreign_keys=[assigned_to])


class Dispatch(TimestampMixin, Base):
    __tablename__ = "dispatches"
    id = Column(Integer, primary_key=True, index=True)
    driver_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False, index=True)
    delivery_date = Column(Date, nullable=True)
    status = Column(_enum_column_type(DispatchStatus, "dispatch_status"), nullable=False, default=DispatchStatus.assigned)

    order = relationship("Order")
    driver = relationship("User")


class Inventory(TimestampMixin, Base):
    __tablename__ = "inventories"
    id = Column(Integer, primary_key=True, index=True)
    quantity = Column(Integer, nullable=False, default=1)
    change_type = Column(_enum_column_type(ChangeType, "change_type"), nullable=False)
    reason = Column(String, nullable=False)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=True)

    product = relationship("Product")
    order = relationship("Order")


class Payment(TimestampMixin, Base):
    __tablename__ = "payments"
    id = Column(Integer, primary_key=True, index=True)
    amount = Column(_money(), nullable=True)
    phone_number = Column(String, nullable=True)
    status = Column(String, nullable=True)
    is_approved = Column(Boolean, nullable=False, default=False)
    reference = Column(String, nullable=True, index=True)
    checkout_request_id = Column(String, nullable=True, index=True)
    mpesa_receipt_number = Column(String, nullable=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False)
    # Nullable: a payment can be initiated before the order is finalized
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=True)

    user = relationship("User", back_populates="payments")
    order = relationship("Order")


class Feedback(TimestampMixin, Base):
    __tablename__ = "feedbacks"
    id = Column(Integer, primary_key=True, index=True)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False)

    user = relationship("User", back_populates="feedbacks")
    product = relationship("Product", back_populates="feedbacks")

    __table_args__ = (
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_feedbacks_rating_range"),
    )


class UserAddress(TimestampMixin, Base):
    __tablename__ = "user_addresses"
    id = Column(Integer, primary_key=True, index=True)
    county = Column(
        Enum(*KENYAN_COUNTIES, name="kenyan_county", create_constraint=True, validate_strings=True),
        nullable=False,
    )
    sub_county = Column(String, nullable=True)
    ward = Column(String, nullable=True)
    street = Column(String, nullable=True)
    phone_number = Column(String, nullable=False)
    postal_code = Column(String, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False, index=True)

    user = relationship("User", back_populates="addresses")


class Report(TimestampMixin, Base):
    __tablename__ = "reports"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False)
    title = Column(String, nullable=False)
    type = Column(_enum_column_type(ReportType, "report_type"), default=ReportType.custom)
    content = Column(Text, nullable=False, default="{}")  # JSON stored as text
    format = Column(_enum_column_type(ReportFormat, "report_format"), nullable=False, default=ReportFormat.pdf)
    filters = Column(Text, nullable=True)
    period = Column(_enum_column_type(ReportPeriod, "report_period"), default=ReportPeriod.monthly)
    start_date = Column(DateTime(timezone=True), nullable=True)
    end_date = Column(DateTime(timezone=True), nullable=True)
    file_url = Column(String, nullable=True)
    is_generated = Column(Boolean, nullable=False, default=False)
    download_count = Column(Integer, nullable=False, default=0)

    user = relationship("User")


class Contact(TimestampMixin, Base):
    __tablename__ = "contacts"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    message = Column(Text, nullable=False)
