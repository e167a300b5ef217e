from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Mapping, Optional, Tuple

from utils.exceptions import ValidationError


class DeliveryStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


@dataclass(frozen=True)
class OrderLine:
    product_name: str
    quantity: int
    notes: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "OrderLine":
        return cls(
            product_name=str(row.get("product_name", "")),
            quantity=int(row.get("quantity") or 0),
            notes=row.get("notes") or None,
        )


@dataclass(frozen=True)
class DeliveryItem:
    order_id: int
    status: DeliveryStatus
    customer_name: str
    address: str
    phone: str
    payment_method: str
    items: Tuple[OrderLine, ...] = field(default_factory=tuple)
    notes_for_courier: Optional[str] = None
    delivery_date: Optional[str] = None

    @property
    def is_pending(self) -> bool:
        return self.status is DeliveryStatus.PENDING

    @property
    def is_cod(self) -> bool:
        return self.payment_method.lower() == "cod"

    def with_status(self, status: DeliveryStatus) -> "DeliveryItem":
        """Status is the only field the courier may change."""

        return replace(self, status=DeliveryStatus(status))

    def summary(self) -> str:
        """``2x Nasi Box, 1x Es Teh`` style line for the list row."""

        return ", ".join(f"{line.quantity}x {line.product_name}" for line in self.items)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "DeliveryItem":
        return cls(
            order_id=int(row["order_id"]),
            status=DeliveryStatus(row.get("delivery_status") or DeliveryStatus.PENDING.value),
            customer_name=str(row.get("customer_name") or ""),
            address=str(row.get("customer_address") or ""),
            phone=str(row.get("customer_phone") or ""),
            payment_method=str(row.get("payment_method") or ""),
            items=tuple(OrderLine.from_row(line) for line in row.get("order_details") or ()),
            notes_for_courier=row.get("notes_for_courier") or None,
            delivery_date=row.get("delivery_date") or None,
        )


@dataclass(frozen=True)
class PendingTransition:
    """Optimistic status change awaiting remote confirmation."""

    order_id: int
    target: DeliveryStatus
    previous: DeliveryStatus
    token: int


@dataclass(frozen=True)
class DailyReport:
    """End-of-day report a courier sends once every delivery is done."""

    summary_notes: Optional[str] = None
    total_cod_collected: Optional[float] = None

    @classmethod
    def parse(cls, summary_notes: Optional[str], cod_text: Any, *, has_cod: bool) -> "DailyReport":
        """Build a report from raw form input.

        The COD total is required (and must be ``>= 0``) when any of the
        day's deliveries was cash on delivery; otherwise it is ignored.
        """

        notes = (summary_notes or "").strip() or None
        if not has_cod:
            return cls(summary_notes=notes)
        if isinstance(cod_text, (int, float)):
            amount = float(cod_text)
        else:
            text = str(cod_text or "").strip()
            if not text:
                raise ValidationError("Total dana COD wajib diisi")
            try:
                amount = float(text)
            except ValueError as exc:
                raise ValidationError("Total dana COD harus berupa angka") from exc
        if amount < 0:
            raise ValidationError("Total dana COD tidak boleh negatif")
        return cls(summary_notes=notes, total_cod_collected=amount)


__all__ = ["DeliveryStatus", "OrderLine", "DeliveryItem", "PendingTransition", "DailyReport"]
