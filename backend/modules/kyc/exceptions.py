"""
KYC module exceptions.
"""

from shared.exceptions import ConflictError, NotFoundError


class KycSubmissionNotFoundError(NotFoundError):
    def __init__(self, submission_id: str):
        super().__init__(
            "KYC submission not found",
            code="KYC_SUBMISSION_NOT_FOUND",
            details={"submission_id": submission_id},
        )


class KycAlreadySubmittedError(ConflictError):
    """Raised when the user's KYC is pending, under review or approved."""

    def __init__(self, kyc_status: str):
        super().__init__(
            f"KYC cannot be submitted while status is {kyc_status}",
            code="KYC_ALREADY_SUBMITTED",
            details={"kyc_status": kyc_status},
        )


class InvalidKycTransitionError(ConflictError):
    """Raised when a submission is not in a state the action applies to."""

    def __init__(self, submission_id: str, status: str, action: str):
        super().__init__(
            f"Cannot {action} a submission that is {status}",
            code="INVALID_KYC_TRANSITION",
            details={"submission_id": submission_id, "status": status, "action": action},
        )
