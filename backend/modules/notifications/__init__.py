"""
Notifications module.

Transactional emails: verification and reset codes, invitations, KYC
status updates.
"""

from .interfaces import INotificationService
from .exceptions import EmailDeliveryError, EmailNotConfiguredError

__all__ = [
    "INotificationService",
    "EmailDeliveryError",
    "EmailNotConfiguredError",
]
