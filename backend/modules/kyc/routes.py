"""
KYC API endpoints for restaurant admins.

Mounted under /api/kyc. Review endpoints live in api/routes/admin.py.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from api.dependencies import get_kyc_service
from api.middleware.auth import get_current_user, require_roles
from api.models.responses import envelope
from api.uploads import read_upload
from shared.models import AuthenticatedUser, UserRole

from .interfaces import IKycService
from .models import KycBusinessDetails

router = APIRouter()


@router.post("/submit", status_code=201)
async def submit_kyc(
    request: Request,
    restaurant_name: Optional[str] = Form(None),
    business_type: Optional[str] = Form(None),
    registration_number: Optional[str] = Form(None),
    address: Optional[str] = Form(None),
    city: Optional[str] = Form(None),
    phone_number: Optional[str] = Form(None),
    owner_name: Optional[str] = Form(None),
    business_license: Optional[UploadFile] = File(None),
    owner_id_front: Optional[UploadFile] = File(None),
    owner_id_back: Optional[UploadFile] = File(None),
    proof_of_address: Optional[UploadFile] = File(None),
    additional_docs: Optional[list[UploadFile]] = File(None),
    user: AuthenticatedUser = Depends(require_roles(UserRole.RESTAURANT_ADMIN)),
    service: IKycService = Depends(get_kyc_service),
) -> dict:
    """
    Submit business details and documents for verification.

    Documents must be JPEG, PNG or PDF, at most 10 MB each.
    """
    details = KycBusinessDetails(
        restaurant_name=restaurant_name,
        business_type=business_type,
        registration_number=registration_number,
        address=address,
        city=city,
        phone_number=phone_number,
        owner_name=owner_name,
    )

    max_bytes = request.app.state.settings.max_document_size_bytes
    documents = {}
    for field, file in (
        ("business_license", business_license),
        ("owner_id_front", owner_id_front),
        ("owner_id_back", owner_id_back),
        ("proof_of_address", proof_of_address),
    ):
        upload = await read_upload(field, file, max_bytes)
        if upload is not None:
            documents[field] = upload

    extra = []
    for file in additional_docs or []:
        upload = await read_upload("additional_docs", file, max_bytes)
        if upload is not None:
            extra.append(upload)

    submission = await service.submit(user.id, details, documents, extra)
    return envelope(
        request,
        "KYC submitted successfully. We will review your documents shortly.",
        {"submission": submission},
        key="kyc.submitted",
    )


@router.get("/status")
async def get_kyc_status(
    request: Request,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IKycService = Depends(get_kyc_service),
) -> dict:
    status = await service.get_status(user.id)
    return envelope(request, "KYC status retrieved", status)
