"""
Web-push gateway.
Delivers notification payloads to browser push endpoints using one VAPID keypair.
"""

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional

from pywebpush import webpush

from agency_api.config import Settings


logger = logging.getLogger(__name__)

DEFAULT_ICON = "/logo.png"


class PushNotificationService:
    """
    Sends web-push messages.

    Delivery never raises: every attempt returns {"success": True, "result": ...}
    or {"success": False, "error": ...}.
    """

    def __init__(self, settings: Settings):
        self.public_key = settings.vapid_public_key
        self.private_key = settings.vapid_private_key
        self.claims = {"sub": settings.vapid_subject}

    @property
    def is_configured(self) -> bool:
        return bool(self.public_key and self.private_key)

    @staticmethod
    def build_payload(title: str, body: str, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Payload shape the service worker expects."""
        return {
            "title": title,
            "body": body,
            "icon": DEFAULT_ICON,
            "badge": DEFAULT_ICON,
            "data": data or {},
            "actions": [
                {"action": "view", "title": "View"},
                {"action": "close", "title": "Close"},
            ],
        }

    async def send(self, subscription: Dict[str, Any], payload: Dict[str, Any]) -> Dict[str, Any]:
        """Send one payload to one subscription."""
        if not self.is_configured:
            logger.warning("VAPID keys not configured, push notification skipped")
            return {"success": False, "error": "Push notifications are not configured"}

        try:
            response = await asyncio.to_thread(
                webpush,
                subscription_info=subscription,
                data=json.dumps(payload),
                vapid_private_key=self.private_key,
                vapid_claims=dict(self.claims),
            )
            status_code = getattr(response, "status_code", None)
            logger.info(f"Push notification sent to {subscription.get('endpoint')} ({status_code})")
            return {"success": True, "result": {"status_code": status_code}}
        except Exception as e:
            logger.error(f"Error sending push notification to {subscription.get('endpoint')}: {str(e)}")
            return {"success": False, "error": str(e)}

    async def send_to_many(
        self,
        subscriptions: List[Dict[str, Any]],
        payload: Dict[str, Any],
    ) -> List[Dict[str, Any]]:
        """Send to each subscription in turn; one failure never stops the rest."""
        results = []
        for subscription in subscriptions:
            try:
                results.append(await self.send(subscription, payload))
            except Exception as e:
                results.append({"success": False, "error": str(e)})
        return results
