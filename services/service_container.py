from __future__ import annotations

"""One place that wires every backend service onto a shared client."""

from dataclasses import dataclass

from models.customer import Customer
from models.ledger import Order, Transaction
from services.backend_client import BackendClient
from services.courier_service import CourierService
from services.customer_service import CustomerService
from services.dashboard_metrics import DashboardMetricsService
from services.list_gateways import RpcListGateway, customer_gateway, order_gateway, transaction_gateway
from services.profile_service import ProfileService
from services.settings_service import SettingsService
from utils.config import AppConfig


@dataclass(frozen=True)
class BackendServices:
    client: BackendClient
    customers: CustomerService
    customer_list: RpcListGateway[Customer]
    order_list: RpcListGateway[Order]
    transaction_list: RpcListGateway[Transaction]
    courier: CourierService
    metrics: DashboardMetricsService
    settings: SettingsService
    profiles: ProfileService

    @classmethod
    def for_client(cls, client: BackendClient) -> "BackendServices":
        return cls(
            client=client,
            customers=CustomerService(client),
            customer_list=customer_gateway(client),
            order_list=order_gateway(client),
            transaction_list=transaction_gateway(client),
            courier=CourierService(client),
            metrics=DashboardMetricsService(client),
            settings=SettingsService(client),
            profiles=ProfileService(client),
        )

    @classmethod
    def from_config(cls, config: AppConfig) -> "BackendServices":
        return cls.for_client(BackendClient.from_config(config))


__all__ = ["BackendServices"]
