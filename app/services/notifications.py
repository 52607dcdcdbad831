"""Fire-and-forget webhook notifications for account events (signup, approval)."""

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

EVENT_USER_SIGNED_UP = "user.signed_up"
EVENT_USER_APPROVED = "user.approved"


def _is_notify_configured(settings: "Settings") -> bool:
    return bool(settings.NOTIFY_WEBHOOK_URL)


def build_event(event: str, data: dict[str, Any]) -> dict[str, Any]:
    return {
        "event": event,
        "occurred_at": datetime.now(UTC).isoformat(),
        "data": data,
    }


def send_notification(settings: "Settings", event: str, data: dict[str, Any]) -> bool:
    """
    POST an event to NOTIFY_WEBHOOK_URL. Returns True when delivered.

    Runs as a background task after the response is sent, so failures are
    logged and never propagate to the request that triggered them. No retry.
    """
    if not _is_notify_configured(settings):
        return False
    body = build_event(event, data)
    try:
        with httpx.Client(timeout=settings.NOTIFY_REQUEST_TIMEOUT_SEC) as client:
            response = client.post(settings.NOTIFY_WEBHOOK_URL, json=body)
    except httpx.HTTPError as e:
        logger.warning("Notification %s not delivered: %s", event, e)
        return False
    if response.status_code >= 400:
        logger.warning(
            "Notification %s rejected by webhook: status=%s",
            event,
            response.status_code,
        )
        return False
    logger.info("Notification %s delivered", event)
    return True
