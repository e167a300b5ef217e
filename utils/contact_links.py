from __future__ import annotations

"""Deep links for contacting a customer from the delivery list."""

import re
from urllib.parse import quote

_NON_DIGITS = re.compile(r"\D")
# characters encodeURIComponent leaves alone
_URI_SAFE = "!'()*"


def whatsapp_url(phone: str, customer_name: str) -> str:
    """Return a ``wa.me`` link with the on-the-way greeting pre-filled."""

    digits = _NON_DIGITS.sub("", phone or "")
    message = f"Halo {customer_name}, pesanan Anda sedang dalam perjalanan!"
    return f"https://wa.me/{digits}?text={quote(message, safe=_URI_SAFE)}"


def maps_url(address: str) -> str:
    """Return a Google Maps search link for ``address``."""

    return f"https://maps.google.com/?q={quote(address or '', safe=_URI_SAFE)}"


__all__ = ["whatsapp_url", "maps_url"]
