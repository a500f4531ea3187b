# tenancy/session.py
"""
Session refresh for platform (non-tenant) requests.

Tenant storefronts are public and never touch the admin session; everything
else goes through refresh_session() so an active owner session slides forward.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def refresh_session(request, get_response):
    session = getattr(request, "session", None)

    # Re-save a live session so SessionMiddleware re-issues the cookie with a
    # fresh expiry. Empty (anonymous) sessions are left alone.
    if session is not None and not session.is_empty():
        session.modified = True
        logger.debug("Session refreshed", extra={"path": request.path})

    return get_response(request)
