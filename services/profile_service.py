from __future__ import annotations

import logging
from typing import Optional

from models.profile import Profile
from services.backend_client import BackendClient

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, client: BackendClient) -> None:
        self._client = client

    def get_profile(self, profile_id: str) -> Optional[Profile]:
        """Load the signed-in user's profile row, or ``None`` if it is missing."""

        row = self._client.select_one("profiles", match={"id": profile_id})
        if row is None:
            logger.warning("No profile found for %s", profile_id)
            return None
        return Profile.from_row(row)


__all__ = ["ProfileService"]
