"""
KYC module data models.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from shared.models import KycStatus, Pagination


class SubmissionStatus(str, Enum):
    PENDING = "pending"
    UNDER_REVIEW = "under_review"
    APPROVED = "approved"
    REJECTED = "rejected"


# Submission states a reviewer may still act on
REVIEWABLE_STATUSES = (SubmissionStatus.PENDING, SubmissionStatus.UNDER_REVIEW)

# User KYC states that allow a (re)submission
SUBMITTABLE_KYC_STATUSES = (KycStatus.NOT_SUBMITTED, KycStatus.REJECTED)

REQUIRED_DOCUMENTS = ("business_license", "owner_id_front", "proof_of_address")
OPTIONAL_DOCUMENTS = ("owner_id_back",)
MAX_ADDITIONAL_DOCS = 5


class KycDocuments(BaseModel):
    business_license: Optional[str] = None
    owner_id_front: Optional[str] = None
    owner_id_back: Optional[str] = None
    proof_of_address: Optional[str] = None
    additional_docs: list[str] = Field(default_factory=list)


class KycSubmission(BaseModel):
    """A row of the kyc_submissions table."""

    model_config = {"extra": "ignore"}

    id: str
    user_id: str
    restaurant_name: str
    business_type: Optional[str] = None
    registration_number: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    phone_number: Optional[str] = None
    owner_name: Optional[str] = None
    documents: KycDocuments = Field(default_factory=KycDocuments)
    status: SubmissionStatus = SubmissionStatus.PENDING
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    restaurant_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class KycBusinessDetails(BaseModel):
    """Form fields of a KYC submission, documents excluded."""

    restaurant_name: Optional[str] = None
    business_type: Optional[str] = None
    registration_number: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    phone_number: Optional[str] = None
    owner_name: Optional[str] = None


class KycStatusResponse(BaseModel):
    kyc_status: KycStatus
    submission: Optional[KycSubmission] = None


class KycSubmissionListResponse(BaseModel):
    submissions: list[KycSubmission]
    pagination: Pagination


class RejectSubmissionRequest(BaseModel):
    reason: Optional[str] = None
