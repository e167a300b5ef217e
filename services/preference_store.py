from __future__ import annotations

"""Sort preference persistence for the listing pages."""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from logic.preferences import SortPreference
from models.list_query import SortOrder

logger = logging.getLogger(__name__)

PREFERENCES_FILE = "preferences.json"


class MemoryPreferenceStore:
    def __init__(self, initial: Optional[SortPreference] = None) -> None:
        self._value = initial
        self.saves = 0

    def load(self) -> Optional[SortPreference]:
        return self._value

    def save(self, preference: SortPreference) -> None:
        self._value = preference
        self.saves += 1


class JsonPreferenceStore:
    """One ``key`` inside a shared JSON document, written atomically.

    Unreadable or malformed files load as "no preference" so a corrupt file
    never blocks the page from opening.
    """

    def __init__(self, path: Path | str, key: str) -> None:
        self.path = Path(path)
        self.key = key

    def load(self) -> Optional[SortPreference]:
        entry = self._read().get(self.key)
        if not isinstance(entry, dict):
            return None
        try:
            return SortPreference(
                sort_by=str(entry["sort_by"]),
                sort_order=SortOrder(entry.get("sort_order", SortOrder.ASC.value)),
            )
        except (KeyError, ValueError):
            logger.warning("Ignoring malformed sort preference %r in %s", entry, self.path)
            return None

    def save(self, preference: SortPreference) -> None:
        document = self._read()
        document[self.key] = {
            "sort_by": preference.sort_by,
            "sort_order": SortOrder(preference.sort_order).value,
        }
        _write_json(self.path, document)

    def _read(self) -> Dict[str, Any]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            logger.warning("Could not read %s: %s", self.path, exc)
            return {}
        if not text.strip():
            return {}
        try:
            document = json.loads(text)
        except json.JSONDecodeError as exc:
            logger.warning("Could not parse %s: %s", self.path, exc)
            return {}
        return document if isinstance(document, dict) else {}


def _write_json(path: Path, payload: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f"{path.name}.tmp.{os.getpid()}")
    try:
        tmp_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        os.replace(tmp_path, path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise


def preference_store_for(data_dir: Path | str, page: str) -> JsonPreferenceStore:
    return JsonPreferenceStore(Path(data_dir) / PREFERENCES_FILE, f"{page}.sort")


__all__ = ["JsonPreferenceStore", "MemoryPreferenceStore", "preference_store_for", "PREFERENCES_FILE"]
