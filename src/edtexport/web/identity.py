"""Best-effort lookup of the requesting user's identity."""

from __future__ import annotations

import logging

from fastapi import Request

logger = logging.getLogger(__name__)


def resolve_user_identity(request: Request, header: str) -> str:
    """Return the identity the fronting proxy put in ``header``, else ``""``.

    Never raises: a page render must not fail because identity is unknown.
    """
    try:
        value = request.headers.get(header, "")
        return value.strip()
    except Exception as e:
        logger.debug("Identity lookup failed: %s", e)
        return ""
