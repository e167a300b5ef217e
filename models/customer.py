from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from models.list_query import ListFilter


class CustomerFilter(ListFilter):
    """``active`` customers have at least one pending order."""

    ALL = "all"
    ACTIVE = "active"
    INACTIVE = "inactive"


CUSTOMER_SORT_COLUMNS = ("nama", "ongkir", "date_created")


@dataclass(frozen=True)
class Customer:
    id: int
    nama: str
    alamat: Optional[str] = None
    telepon: Optional[str] = None
    telepon_alt: Optional[str] = None
    telepon_pemesan: Optional[str] = None
    maps: Optional[str] = None
    ongkir: Optional[float] = None
    date_created: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Customer":
        ongkir = row.get("ongkir")
        return cls(
            id=int(row["id"]),
            nama=str(row.get("nama") or ""),
            alamat=row.get("alamat") or None,
            telepon=row.get("telepon") or None,
            telepon_alt=row.get("telepon_alt") or None,
            telepon_pemesan=row.get("telepon_pemesan") or None,
            maps=row.get("maps") or None,
            ongkir=float(ongkir) if ongkir not in (None, "") else None,
            date_created=row.get("date_created") or None,
        )


__all__ = ["Customer", "CustomerFilter", "CUSTOMER_SORT_COLUMNS"]
