"""
KYC module.

Restaurant onboarding: admins submit business documents, super admins
review them, and approval provisions the restaurant.
"""

from .interfaces import IKycService
from .models import KycSubmission, SubmissionStatus, KycStatusResponse
from .exceptions import (
    InvalidKycTransitionError,
    KycAlreadySubmittedError,
    KycSubmissionNotFoundError,
)

__all__ = [
    "IKycService",
    "KycSubmission",
    "SubmissionStatus",
    "KycStatusResponse",
    "InvalidKycTransitionError",
    "KycAlreadySubmittedError",
    "KycSubmissionNotFoundError",
]
