"""
Web-push delivery infrastructure.
"""

from .push_service import PushNotificationService

__all__ = ["PushNotificationService"]
