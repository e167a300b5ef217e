from __future__ import annotations

"""Customer CRUD against the ``customers`` table."""

from dataclasses import asdict, dataclass
import logging
from typing import Any, Dict, Mapping, Optional

from models.customer import Customer
from services.backend_client import BackendClient
from utils.exceptions import GatewayError, ValidationError

logger = logging.getLogger(__name__)

TABLE = "customers"


def _text(raw: Mapping[str, Any], key: str) -> Optional[str]:
    value = raw.get(key)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


@dataclass(frozen=True)
class CustomerForm:
    """Validated add/edit customer input."""

    nama: str
    alamat: Optional[str] = None
    telepon: Optional[str] = None
    telepon_alt: Optional[str] = None
    telepon_pemesan: Optional[str] = None
    maps: Optional[str] = None
    ongkir: Optional[float] = None

    @classmethod
    def parse(cls, raw: Mapping[str, Any]) -> "CustomerForm":
        nama = _text(raw, "nama")
        if not nama:
            raise ValidationError("Customer name is required")
        ongkir_raw = raw.get("ongkir")
        ongkir: Optional[float] = None
        if isinstance(ongkir_raw, (int, float)) and not isinstance(ongkir_raw, bool):
            ongkir = float(ongkir_raw)
        elif _text(raw, "ongkir"):
            try:
                ongkir = float(str(ongkir_raw).strip())
            except ValueError as exc:
                raise ValidationError("Shipping cost must be a number") from exc
        if ongkir is not None and ongkir < 0:
            raise ValidationError("Shipping cost cannot be negative")
        return cls(
            nama=nama,
            alamat=_text(raw, "alamat"),
            telepon=_text(raw, "telepon"),
            telepon_alt=_text(raw, "telepon_alt"),
            telepon_pemesan=_text(raw, "telepon_pemesan"),
            maps=_text(raw, "maps"),
            ongkir=ongkir,
        )

    @classmethod
    def from_customer(cls, customer: Customer) -> "CustomerForm":
        return cls(
            nama=customer.nama,
            alamat=customer.alamat,
            telepon=customer.telepon,
            telepon_alt=customer.telepon_alt,
            telepon_pemesan=customer.telepon_pemesan,
            maps=customer.maps,
            ongkir=customer.ongkir,
        )

    def to_row(self) -> Dict[str, Any]:
        # blank fields go out as null so an edit can clear them
        return asdict(self)


class CustomerService:
    def __init__(self, client: BackendClient) -> None:
        self._client = client

    def get_customer(self, customer_id: int) -> Optional[Customer]:
        row = self._client.select_one(TABLE, match={"id": customer_id})
        return Customer.from_row(row) if row else None

    def create_customer(self, form: CustomerForm) -> Customer:
        row = self._client.insert(TABLE, form.to_row())
        logger.info("Created customer %s", row.get("id"))
        return Customer.from_row(row)

    def update_customer(self, customer_id: int, form: CustomerForm) -> Customer:
        rows = self._client.update(TABLE, form.to_row(), match={"id": customer_id})
        if not rows:
            raise GatewayError("NOT_FOUND", f"Customer {customer_id} no longer exists")
        logger.info("Updated customer %s", customer_id)
        return Customer.from_row(rows[0])

    def delete_customer(self, customer_id: int) -> None:
        self._client.delete(TABLE, match={"id": customer_id})
        logger.info("Deleted customer %s", customer_id)


__all__ = ["CustomerForm", "CustomerService"]
