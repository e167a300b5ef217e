from __future__ import annotations

"""Courier-facing remote procedures, keyed by the courier's access token."""

import logging
from typing import Any, List, Mapping, Optional

from models.delivery import DeliveryItem, DeliveryStatus
from services.backend_client import BackendClient, unwrap_envelope
from utils.exceptions import GatewayError, ValidationError

logger = logging.getLogger(__name__)


class CourierService:
    """Wraps the four courier RPCs and unwraps their result envelopes."""

    def __init__(self, client: BackendClient) -> None:
        self._client = client

    def _call(self, name: str, token: str, **params: Any) -> Any:
        if not token:
            raise ValidationError("Courier token is required")
        return unwrap_envelope(self._client.rpc(name, {"courier_token": token, **params}))

    def get_deliveries(self, token: str) -> List[DeliveryItem]:
        data = self._call("get_deliveries_for_courier", token)
        if data is None:
            return []
        if not isinstance(data, list):
            raise GatewayError("BAD_RESPONSE", "Unexpected delivery list format")
        return [DeliveryItem.from_row(row) for row in data]

    def update_delivery_status(self, token: str, order_id: int, status: DeliveryStatus | str) -> Any:
        status = DeliveryStatus(status)
        logger.debug("Setting order %s to %s", order_id, status.value)
        return self._call(
            "update_delivery_status",
            token,
            target_order_id=order_id,
            new_status=status.value,
        )

    def batch_update_today_deliveries(self, token: str) -> int:
        data = self._call("batch_update_today_deliveries", token)
        if isinstance(data, Mapping):
            return int(data.get("updated_count") or 0)
        return int(data or 0)

    def submit_daily_report(
        self,
        token: str,
        summary_notes: Optional[str] = None,
        total_cod_collected: Optional[float] = None,
    ) -> Any:
        return self._call(
            "submit_daily_report",
            token,
            summary_notes=summary_notes,
            total_cod_collected=total_cod_collected,
        )


__all__ = ["CourierService"]
