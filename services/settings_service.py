from __future__ import annotations

"""Backend settings and the active-customer report."""

from dataclasses import dataclass
from enum import Enum
import logging
from typing import Any, Mapping, Optional, Tuple

from services.backend_client import BackendClient, unwrap_envelope
from utils.exceptions import GatewayError, ValidationError

logger = logging.getLogger(__name__)

SETTINGS_TABLE = "settings"
TIMEZONE_KEY = "timezone"
DEFAULT_TIMEZONE = "Asia/Jakarta"


class Severity(str, Enum):
    OK = "ok"
    WARNING = "warning"
    OVERDUE = "overdue"


def severity_for(pending_days: int) -> Severity:
    if pending_days > 7:
        return Severity.OVERDUE
    if pending_days > 3:
        return Severity.WARNING
    return Severity.OK


@dataclass(frozen=True)
class ActiveCustomer:
    id: str
    name: str
    pending_days: int

    @property
    def severity(self) -> Severity:
        return severity_for(self.pending_days)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ActiveCustomer":
        return cls(
            id=str(row.get("id", "")),
            name=str(row.get("name") or ""),
            pending_days=int(row.get("pending_days") or 0),
        )


@dataclass(frozen=True)
class ActiveCustomerReport:
    count: int
    customers: Tuple[ActiveCustomer, ...] = ()


class SettingsService:
    def __init__(self, client: BackendClient) -> None:
        self._client = client

    def get_timezone(self) -> Optional[str]:
        row = self._client.select_one(SETTINGS_TABLE, match={"key": TIMEZONE_KEY}, columns="value")
        if not row:
            return None
        return row.get("value") or None

    def update_timezone(self, timezone: str) -> str:
        value = (timezone or "").strip()
        if not value:
            raise ValidationError("Timezone cannot be empty")
        rows = self._client.update(SETTINGS_TABLE, {"value": value}, match={"key": TIMEZONE_KEY})
        if not rows:
            raise GatewayError("NOT_FOUND", "Timezone setting is missing on the server")
        logger.info("Timezone updated to %s", value)
        return value

    def active_customer_report(self) -> ActiveCustomerReport:
        data = unwrap_envelope(self._client.rpc("get_active_customer_count"))
        if not isinstance(data, Mapping):
            raise GatewayError("BAD_RESPONSE", "Unexpected active customer report format")
        customers = tuple(ActiveCustomer.from_row(row) for row in data.get("customers") or ())
        return ActiveCustomerReport(count=int(data.get("count") or len(customers)), customers=customers)


__all__ = [
    "ActiveCustomer",
    "ActiveCustomerReport",
    "Severity",
    "SettingsService",
    "severity_for",
    "DEFAULT_TIMEZONE",
]
