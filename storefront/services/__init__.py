from .store_service import StoreService
from .auth_service import AuthService, UserSession
from .order_service import OrderService
from .order_workflow import OrderWorkflow, OrderState
from .product_service import ProductService
from .reporting_service import ReportingService

__all__ = [
    'StoreService',
    'AuthService',
    'UserSession',
    'OrderService',
    'OrderWorkflow',
    'OrderState',
    'ProductService',
    'ReportingService'
]
