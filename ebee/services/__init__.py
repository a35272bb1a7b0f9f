"""
Service layer package initialization.
"""
from .address_service import AddressService
from .auth_service import AuthService
from .booking_service import BookingService
from .cart_service import CartService
from .catalog_service import CatalogService
from .contact_service import ContactService
from .dispatch_service import DispatchService
from .feedback_service import FeedbackService
from .fine_service import FineService
from .inventory_service import InventoryService
from .order_service import OrderService
from .payment_service import PaymentService
from .product_service import ProductService
from .rental_service import RentalService
from .report_service import ReportService
from .user_service import UserService

__all__ = [
    "AddressService", "AuthService", "BookingService", "CartService", "CatalogService",
    "ContactService", "DispatchService", "FeedbackService", "FineService", "InventoryService",
    "OrderService", "PaymentService", "ProductService", "RentalService", "ReportService",
    "UserService",
]
