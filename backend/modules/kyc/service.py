"""
KYC service implementation.

Submission lifecycle:

    pending -> under_review -> approved | rejected
    pending ---------------> approved | rejected

A rejected user may submit again. Approval provisions the restaurant and
promotes the submitter to its admin.
"""

import logging
from typing import Optional

from modules.auth.exceptions import AccountNotFoundError
from modules.auth.phone import is_valid_phone_number, normalize_phone_number
from modules.auth.repository import UserRepository
from modules.notifications.exceptions import EmailDeliveryError
from modules.notifications.interfaces import INotificationService
from modules.restaurants.interfaces import IRestaurantService
from providers.base import ImageStorage
from shared.config import Settings, get_settings
from shared.exceptions import ValidationError
from shared.models import KycStatus, Pagination, UserRole
from shared.repository import to_iso, utc_now
from shared.uploads import DOCUMENT_TYPES, UploadedFile, upload_errors

from .exceptions import (
    InvalidKycTransitionError,
    KycAlreadySubmittedError,
    KycSubmissionNotFoundError,
)
from .interfaces import IKycService
from .models import (
    MAX_ADDITIONAL_DOCS,
    OPTIONAL_DOCUMENTS,
    REQUIRED_DOCUMENTS,
    REVIEWABLE_STATUSES,
    SUBMITTABLE_KYC_STATUSES,
    KycBusinessDetails,
    KycDocuments,
    KycStatusResponse,
    KycSubmission,
    KycSubmissionListResponse,
    SubmissionStatus,
)
from .repository import KycRepository

logger = logging.getLogger(__name__)

DOCUMENTS_FOLDER = "kyc-documents"

REQUIRED_FIELDS = {
    "restaurant_name": "Restaurant name",
    "business_type": "Business type",
    "address": "Address",
    "city": "City",
    "phone_number": "Phone number",
    "owner_name": "Owner name",
}


class KycService(IKycService):
    def __init__(
        self,
        repository: KycRepository,
        users: UserRepository,
        restaurants: IRestaurantService,
        notifications: INotificationService,
        storage: ImageStorage,
        settings: Optional[Settings] = None,
    ):
        self._submissions = repository
        self._users = users
        self._restaurants = restaurants
        self._notifications = notifications
        self._storage = storage
        self._settings = settings or get_settings()

    # -------------------------------------------------------------------------
    # Submission
    # -------------------------------------------------------------------------

    def _submission_errors(
        self,
        details: KycBusinessDetails,
        documents: dict[str, UploadedFile],
        additional_docs: list[UploadedFile],
    ) -> list[str]:
        errors = []
        for field, label in REQUIRED_FIELDS.items():
            value = getattr(details, field)
            if not value or not value.strip():
                errors.append(f"{label} is required")
        if details.phone_number and not is_valid_phone_number(details.phone_number):
            errors.append("Please provide a valid phone number")

        for field in REQUIRED_DOCUMENTS:
            if field not in documents:
                errors.append(f"{field} document is required")
        if len(additional_docs) > MAX_ADDITIONAL_DOCS:
            errors.append(f"At most {MAX_ADDITIONAL_DOCS} additional documents are allowed")

        max_bytes = self._settings.max_document_size_bytes
        for upload in [*documents.values(), *additional_docs]:
            errors.extend(upload_errors(upload, DOCUMENT_TYPES, max_bytes))
        return errors

    async def _upload_all(
        self,
        documents: dict[str, UploadedFile],
        additional_docs: list[UploadedFile],
    ) -> KycDocuments:
        stored: list[str] = []
        try:
            urls = {}
            for field, upload in documents.items():
                result = await self._storage.upload(
                    upload.content, upload.filename, upload.content_type, DOCUMENTS_FOLDER
                )
                stored.append(result.url)
                urls[field] = result.url

            extra = []
            for upload in additional_docs:
                result = await self._storage.upload(
                    upload.content, upload.filename, upload.content_type, DOCUMENTS_FOLDER
                )
                stored.append(result.url)
                extra.append(result.url)
        except Exception:
            await self._discard_documents(stored)
            raise

        return KycDocuments(**urls, additional_docs=extra)

    async def _discard_documents(self, urls: list[str]) -> None:
        for url in urls:
            try:
                await self._storage.delete(url)
            except Exception as e:
                logger.warning(f"Failed to clean up KYC document {url}: {e}")

    async def submit(
        self,
        user_id: str,
        details: KycBusinessDetails,
        documents: dict[str, UploadedFile],
        additional_docs: Optional[list[UploadedFile]] = None,
    ) -> KycSubmission:
        additional_docs = list(additional_docs or [])
        documents = {
            field: upload
            for field, upload in documents.items()
            if field in REQUIRED_DOCUMENTS + OPTIONAL_DOCUMENTS
        }

        user = self._users.get_by_id(user_id)
        if user is None:
            raise AccountNotFoundError("User not found")
        if user.kyc_status not in SUBMITTABLE_KYC_STATUSES:
            raise KycAlreadySubmittedError(user.kyc_status.value)

        errors = self._submission_errors(details, documents, additional_docs)
        if errors:
            raise ValidationError(errors=errors, code="VALIDATION_FAILED")

        stored = await self._upload_all(documents, additional_docs)
        try:
            submission = self._submissions.create({
                "user_id": user.id,
                "restaurant_name": details.restaurant_name.strip(),
                "business_type": details.business_type.strip(),
                "registration_number": (details.registration_number or "").strip() or None,
                "address": details.address.strip(),
                "city": details.city.strip(),
                "phone_number": normalize_phone_number(details.phone_number),
                "owner_name": details.owner_name.strip(),
                "documents": stored.model_dump(),
                "status": SubmissionStatus.PENDING.value,
            })
        except Exception:
            urls = [getattr(stored, field) for field in REQUIRED_DOCUMENTS + OPTIONAL_DOCUMENTS]
            await self._discard_documents([url for url in urls if url] + stored.additional_docs)
            raise
        self._users.update(user.id, {
            "kyc_status": KycStatus.PENDING.value,
            "kyc_submission_id": submission.id,
        })
        logger.info(f"KYC submission {submission.id} created by user {user.id}")

        try:
            await self._notifications.send_kyc_received(
                user.email, user.name, submission.restaurant_name
            )
        except EmailDeliveryError as e:
            logger.warning(f"KYC receipt email to {user.email} failed: {e.message}")

        return submission

    async def get_status(self, user_id: str) -> KycStatusResponse:
        user = self._users.get_by_id(user_id)
        if user is None:
            raise AccountNotFoundError("User not found")
        return KycStatusResponse(
            kyc_status=user.kyc_status,
            submission=self._submissions.get_latest_for_user(user_id),
        )

    # -------------------------------------------------------------------------
    # Review
    # -------------------------------------------------------------------------

    async def list_submissions(
        self,
        page: int = 1,
        page_size: int = 20,
        status: Optional[str] = None,
    ) -> KycSubmissionListResponse:
        status_filter = None
        if status:
            try:
                status_filter = SubmissionStatus(status)
            except ValueError:
                raise ValidationError(
                    errors=[f"Invalid status: {status}"], code="VALIDATION_FAILED"
                )

        submissions, total = self._submissions.list_submissions(page, page_size, status_filter)
        return KycSubmissionListResponse(
            submissions=submissions,
            pagination=Pagination.build(page, page_size, total),
        )

    async def get_submission(self, submission_id: str) -> KycSubmission:
        submission = self._submissions.get_by_id(submission_id)
        if submission is None:
            raise KycSubmissionNotFoundError(submission_id)
        return submission

    async def _transition(
        self,
        submission_id: str,
        from_statuses: tuple[SubmissionStatus, ...],
        data: dict,
        action: str,
    ) -> KycSubmission:
        updated = self._submissions.transition(submission_id, from_statuses, data)
        if updated is None:
            current = await self.get_submission(submission_id)
            raise InvalidKycTransitionError(submission_id, current.status.value, action)
        return updated

    async def mark_under_review(self, submission_id: str, reviewer_id: str) -> KycSubmission:
        submission = await self._transition(
            submission_id,
            (SubmissionStatus.PENDING,),
            {"status": SubmissionStatus.UNDER_REVIEW.value, "reviewed_by": reviewer_id},
            "review",
        )
        self._users.update(submission.user_id, {"kyc_status": KycStatus.UNDER_REVIEW.value})
        logger.info(f"KYC submission {submission_id} under review by {reviewer_id}")
        return submission

    async def approve(self, submission_id: str, reviewer_id: str) -> KycSubmission:
        previous = await self.get_submission(submission_id)
        submission = await self._transition(
            submission_id,
            REVIEWABLE_STATUSES,
            {
                "status": SubmissionStatus.APPROVED.value,
                "reviewed_by": reviewer_id,
                "reviewed_at": to_iso(utc_now()),
            },
            "approve",
        )

        owner = self._users.get_by_id(submission.user_id)
        try:
            restaurant = await self._restaurants.create_restaurant({
                "name": submission.restaurant_name,
                "address": submission.address,
                "city": submission.city,
                "phone_number": submission.phone_number,
                "email": owner.email if owner else None,
                "admin_id": submission.user_id,
                "created_by": submission.user_id,
                "kyc_submission_id": submission.id,
            })
        except Exception:
            logger.error(
                f"Restaurant provisioning failed for KYC {submission_id}; "
                f"reverting to {previous.status.value}"
            )
            self._submissions.update(submission_id, {
                "status": previous.status.value,
                "reviewed_by": previous.reviewed_by,
                "reviewed_at": to_iso(previous.reviewed_at),
            })
            raise

        submission = self._submissions.update(submission_id, {"restaurant_id": restaurant.id}) or submission
        self._users.update(submission.user_id, {
            "role": UserRole.RESTAURANT_ADMIN.value,
            "restaurant_id": restaurant.id,
            "kyc_status": KycStatus.APPROVED.value,
        })
        logger.info(f"KYC submission {submission_id} approved; restaurant {restaurant.id} provisioned")

        if owner is not None:
            try:
                await self._notifications.send_kyc_approved(owner.email, owner.name, restaurant.name)
            except EmailDeliveryError as e:
                logger.warning(f"KYC approval email to {owner.email} failed: {e.message}")

        return submission

    async def reject(
        self,
        submission_id: str,
        reviewer_id: str,
        reason: Optional[str],
    ) -> KycSubmission:
        reason = (reason or "").strip()
        if not reason:
            raise ValidationError(errors=["Rejection reason is required"], code="VALIDATION_FAILED")

        submission = await self._transition(
            submission_id,
            REVIEWABLE_STATUSES,
            {
                "status": SubmissionStatus.REJECTED.value,
                "rejection_reason": reason,
                "reviewed_by": reviewer_id,
                "reviewed_at": to_iso(utc_now()),
            },
            "reject",
        )
        self._users.update(submission.user_id, {"kyc_status": KycStatus.REJECTED.value})
        logger.info(f"KYC submission {submission_id} rejected by {reviewer_id}")

        owner = self._users.get_by_id(submission.user_id)
        if owner is not None:
            try:
                await self._notifications.send_kyc_rejected(owner.email, owner.name, reason)
            except EmailDeliveryError as e:
                logger.warning(f"KYC rejection email to {owner.email} failed: {e.message}")

        return submission
