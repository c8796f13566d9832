"""
KYC module interface.
"""

from typing import Optional, Protocol, runtime_checkable

from shared.uploads import UploadedFile

from .models import (
    KycBusinessDetails,
    KycStatusResponse,
    KycSubmission,
    KycSubmissionListResponse,
)


@runtime_checkable
class IKycService(Protocol):
    """Restaurant onboarding: submission by admins, review by super admins."""

    async def submit(
        self,
        user_id: str,
        details: KycBusinessDetails,
        documents: dict[str, UploadedFile],
        additional_docs: Optional[list[UploadedFile]] = None,
    ) -> KycSubmission:
        """
        Upload the documents and create a pending submission.

        Raises:
            KycAlreadySubmittedError: KYC is pending, under review or approved
            ValidationError: Missing fields or unacceptable files
        """
        ...

    async def get_status(self, user_id: str) -> KycStatusResponse:
        ...

    async def list_submissions(
        self,
        page: int = 1,
        page_size: int = 20,
        status: Optional[str] = None,
    ) -> KycSubmissionListResponse:
        ...

    async def get_submission(self, submission_id: str) -> KycSubmission:
        ...

    async def mark_under_review(self, submission_id: str, reviewer_id: str) -> KycSubmission:
        ...

    async def approve(self, submission_id: str, reviewer_id: str) -> KycSubmission:
        """
        Approve a pending or under-review submission and provision its
        restaurant. Concurrent approvals yield exactly one restaurant.
        """
        ...

    async def reject(
        self,
        submission_id: str,
        reviewer_id: str,
        reason: Optional[str],
    ) -> KycSubmission:
        ...
