"""
Super admin endpoints.

KYC review, restaurant management and platform statistics. Every route
requires the super_admin role.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from api.dependencies import get_kyc_service, get_restaurant_service
from api.middleware.auth import require_super_admin
from api.models.responses import envelope
from modules.kyc.interfaces import IKycService
from modules.kyc.models import RejectSubmissionRequest
from modules.restaurants.interfaces import IRestaurantService
from modules.restaurants.models import UpdateRestaurantStatusRequest
from shared.models import AuthenticatedUser

router = APIRouter()


# -----------------------------------------------------------------------------
# KYC review
# -----------------------------------------------------------------------------


@router.get("/kyc-submissions")
async def list_kyc_submissions(
    request: Request,
    status: Optional[str] = Query(default=None, description="Filter by status"),
    page: int = Query(default=1, ge=1, description="Page number (1-indexed)"),
    limit: int = Query(default=20, ge=1, le=100, description="Items per page"),
    admin: AuthenticatedUser = Depends(require_super_admin),
    service: IKycService = Depends(get_kyc_service),
) -> dict:
    """KYC submissions, newest first."""
    result = await service.list_submissions(page, limit, status)
    return envelope(request, "KYC submissions retrieved", result)


@router.get("/kyc-submissions/{submission_id}")
async def get_kyc_submission(
    submission_id: str,
    request: Request,
    admin: AuthenticatedUser = Depends(require_super_admin),
    service: IKycService = Depends(get_kyc_service),
) -> dict:
    submission = await service.get_submission(submission_id)
    return envelope(request, "KYC submission retrieved", {"submission": submission})


@router.post("/kyc-submissions/{submission_id}/review")
async def review_kyc_submission(
    submission_id: str,
    request: Request,
    admin: AuthenticatedUser = Depends(require_super_admin),
    service: IKycService = Depends(get_kyc_service),
) -> dict:
    submission = await service.mark_under_review(submission_id, admin.id)
    return envelope(
        request,
        "KYC submission is under review",
        {"submission": submission},
        key="kyc.under_review",
    )


@router.post("/kyc-submissions/{submission_id}/approve")
async def approve_kyc_submission(
    submission_id: str,
    request: Request,
    admin: AuthenticatedUser = Depends(require_super_admin),
    service: IKycService = Depends(get_kyc_service),
) -> dict:
    """Approve the submission and provision its restaurant."""
    submission = await service.approve(submission_id, admin.id)
    return envelope(
        request,
        "KYC approved and restaurant created",
        {"submission": submission},
        key="kyc.approved",
    )


@router.post("/kyc-submissions/{submission_id}/reject")
async def reject_kyc_submission(
    submission_id: str,
    body: RejectSubmissionRequest,
    request: Request,
    admin: AuthenticatedUser = Depends(require_super_admin),
    service: IKycService = Depends(get_kyc_service),
) -> dict:
    submission = await service.reject(submission_id, admin.id, body.reason)
    return envelope(request, "KYC rejected", {"submission": submission}, key="kyc.rejected")


# -----------------------------------------------------------------------------
# Restaurants
# -----------------------------------------------------------------------------


@router.get("/restaurants")
async def list_restaurants(
    request: Request,
    status: Optional[str] = Query(default=None, description="Filter by status"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    admin: AuthenticatedUser = Depends(require_super_admin),
    service: IRestaurantService = Depends(get_restaurant_service),
) -> dict:
    result = await service.list_restaurants(page, limit, status)
    return envelope(request, "Restaurants retrieved", result)


@router.get("/restaurants/{restaurant_id}")
async def get_restaurant(
    restaurant_id: str,
    request: Request,
    admin: AuthenticatedUser = Depends(require_super_admin),
    service: IRestaurantService = Depends(get_restaurant_service),
) -> dict:
    """Restaurant with its user and ingredient counts."""
    detail = await service.get_restaurant_detail(restaurant_id)
    return envelope(request, "Restaurant retrieved", detail)


@router.patch("/restaurants/{restaurant_id}/status")
async def update_restaurant_status(
    restaurant_id: str,
    body: UpdateRestaurantStatusRequest,
    request: Request,
    admin: AuthenticatedUser = Depends(require_super_admin),
    service: IRestaurantService = Depends(get_restaurant_service),
) -> dict:
    restaurant = await service.update_status(restaurant_id, body.status)
    return envelope(
        request,
        "Restaurant status updated",
        {"restaurant": restaurant},
        key="restaurants.status_updated",
    )


@router.get("/stats")
async def get_platform_stats(
    request: Request,
    admin: AuthenticatedUser = Depends(require_super_admin),
    service: IRestaurantService = Depends(get_restaurant_service),
) -> dict:
    stats = await service.get_platform_stats()
    return envelope(request, "Statistics retrieved", stats)
