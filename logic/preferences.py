from __future__ import annotations

"""Persisted sort preference seam for listing controllers."""

from dataclasses import dataclass
from typing import Optional, Protocol

from models.list_query import SortOrder


@dataclass(frozen=True)
class SortPreference:
    sort_by: str
    sort_order: SortOrder = SortOrder.ASC


class PreferenceProvider(Protocol):
    """Storage-agnostic ``load()/save()`` pair injected into controllers."""

    def load(self) -> Optional[SortPreference]:
        ...

    def save(self, preference: SortPreference) -> None:
        ...


__all__ = ["SortPreference", "PreferenceProvider"]
