"""Route guards over the identity the auth service put in the session."""
from __future__ import annotations

import logging
from typing import Any, Callable

from fastapi import HTTPException, Request

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"


def session_identity(request: Request) -> dict[str, Any] | None:
    user = request.session.get("user")
    if not isinstance(user, dict) or not user.get("username"):
        return None
    return user


def require_user(request: Request) -> dict[str, Any]:
    user = session_identity(request)
    if user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


def require_role(role: str) -> Callable[[Request], dict[str, Any]]:
    """Build a dependency admitting only identities whose role is ``role``."""

    def guard(request: Request) -> dict[str, Any]:
        user = require_user(request)
        if user.get("role") != role:
            logger.info("Denied %s to %s (role=%s)", request.url.path, user["username"], user.get("role"))
            raise HTTPException(status_code=403, detail=f"{role.capitalize()} access required")
        return user

    return guard


require_admin = require_role(ADMIN_ROLE)
