"""
views.py — Health Check Endpoint for the VOD backend

Reports database and cache connectivity plus the number of live sessions
held by this process. Returns HTTP 200 if all checks pass, otherwise 503.
"""

import logging

from django.core.cache import cache
from django.db import connection
from django.http import JsonResponse
from django.views.decorators.http import require_GET

from users_app.sessions import get_session_service

logger = logging.getLogger(__name__)


@require_GET
def health_check(request):
    """
    Health-check endpoint.

    Returns:
        JSON response:
        {
            "status": "ok" | "error",
            "components": {
                "database": "ok" | "error: <message>",
                "cache": "ok" | "error: <message>"
            },
            "active_sessions": <int>
        }
    """
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
        db_status = "ok"
    except Exception as e:
        logger.warning("Health check: database unavailable: %s", e)
        db_status = f"error: {str(e)}"

    try:
        cache.set("health:ping", "pong", timeout=5)
        cache_status = "ok" if cache.get("health:ping") == "pong" else "error: miss"
    except Exception as e:
        logger.warning("Health check: cache unavailable: %s", e)
        cache_status = f"error: {str(e)}"

    healthy = db_status == "ok" and cache_status == "ok"
    return JsonResponse(
        {
            "status": "ok" if healthy else "error",
            "components": {
                "database": db_status,
                "cache": cache_status,
            },
            "active_sessions": get_session_service().active_count(),
        },
        status=200 if healthy else 503,
    )
