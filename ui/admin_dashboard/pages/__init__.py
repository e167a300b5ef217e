"""Pages for the admin dashboard."""
from .base import DashboardPage, ListingPage
from .customers import CustomerDialog, CustomersPage
from .finance import FinancePage
from .home import AdminHomePage
from .orders import OrdersPage
from .settings import SettingsPage

__all__ = [
    "AdminHomePage",
    "CustomerDialog",
    "CustomersPage",
    "DashboardPage",
    "FinancePage",
    "ListingPage",
    "OrdersPage",
    "SettingsPage",
]
