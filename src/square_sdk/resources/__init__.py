from .catalog import CatalogApi
from .checkout import CheckoutApi
from .customers import CustomersApi
from .inventory import InventoryApi
from .locations import LocationsApi
from .orders import OrdersApi
from .payments import PaymentsApi
from .transactions import TransactionsApi

__all__ = [
    "CatalogApi",
    "CheckoutApi",
    "CustomersApi",
    "InventoryApi",
    "LocationsApi",
    "OrdersApi",
    "PaymentsApi",
    "TransactionsApi",
]
