from __future__ import annotations

"""Shared exception types for cross-module use."""

from typing import Any, Mapping


class GatewayError(RuntimeError):
    """Raised when the hosted backend rejects or fails a request.

    ``code`` is a short machine-readable token (``"NETWORK_ERROR"``,
    ``"HTTP_500"``, or whatever the remote procedure reported) and
    ``message`` the human readable explanation. Gateway errors are
    recoverable: the caller may re-issue the same request later.
    """

    def __init__(self, code: str, message: str, *, status: int | None = None):
        self.code = code or "UNKNOWN"
        self.message = message or "Unknown backend error"
        self.status = status
        super().__init__(f"{self.code}: {self.message}")

    @classmethod
    def from_payload(
        cls, payload: Any, *, default_code: str, status: int | None = None
    ) -> "GatewayError":
        """Build an error from a ``{"code", "message"}`` style payload."""

        code = default_code
        message = ""
        if isinstance(payload, Mapping):
            block = payload.get("error") if isinstance(payload.get("error"), Mapping) else payload
            code = str(block.get("code") or default_code)
            message = str(block.get("message") or block.get("details") or block.get("hint") or "")
        return cls(code, message or f"Backend request failed ({default_code})", status=status)


class ValidationError(ValueError):
    """Raised for malformed input that must never reach the backend."""


class ConfigError(RuntimeError):
    """Raised when required configuration is missing or malformed."""


__all__ = ["GatewayError", "ValidationError", "ConfigError"]
