"""
Credential verification is delegated to an external auth service.

The service answers ``POST /verify`` with ``{"username", "role"}`` on success
and 401/403 on rejected credentials. Nothing here compares passwords.
"""
from __future__ import annotations

import logging
from typing import Any

import httpx

from ..core.errors import AuthServiceError
from .config import DEFAULT_AUTH_CONFIG, AuthConfig

logger = logging.getLogger(__name__)

_REJECTED = (400, 401, 403)


class AuthServiceClient:
    def __init__(
        self,
        config: AuthConfig | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config or DEFAULT_AUTH_CONFIG
        self._transport = transport

    def authenticate(self, username: str, password: str) -> dict[str, Any] | None:
        """
        Verify credentials. Returns ``{username, role}`` or ``None`` when the
        service rejects them; raises :class:`AuthServiceError` when the service
        is unreachable or its answer is unusable.
        """
        url = f"{self._config.base_url.rstrip('/')}{self._config.verify_path}"
        try:
            with httpx.Client(timeout=self._config.timeout, transport=self._transport) as c:
                r = c.post(url, json={"username": username, "password": password})
        except httpx.HTTPError as exc:
            logger.warning("Auth service unreachable at %s", url, exc_info=True)
            raise AuthServiceError(str(exc)) from exc

        if r.status_code in _REJECTED:
            return None
        if not r.is_success:
            raise AuthServiceError(f"Auth service error: {r.status_code}")

        try:
            body = r.json()
        except ValueError as exc:
            raise AuthServiceError("Auth service returned invalid JSON") from exc
        if not isinstance(body, dict) or not body.get("username"):
            raise AuthServiceError("Auth service response missing username")
        return {"username": str(body["username"]), "role": str(body.get("role") or "user")}


_client: AuthServiceClient | None = None


def get_auth_client() -> AuthServiceClient:
    global _client
    if _client is None:
        _client = AuthServiceClient()
    return _client
