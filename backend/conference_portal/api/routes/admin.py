import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from conference_portal.api.deps import get_admin_service
from conference_portal.core.deps import require_admin
from conference_portal.schemas import AdminRegistration, MarkPaidRequest, MarkPaidResponse
from conference_portal.services.admin import AdminService

router = APIRouter(dependencies=[Depends(require_admin)])
logger = logging.getLogger(__name__)


# ==============================================================================
# 1. LIST REGISTRATIONS (With Search)
# ==============================================================================
@router.get("/registrations", response_model=List[AdminRegistration])
def list_registrations(
    q: Optional[str] = Query(default=None),
    service: AdminService = Depends(get_admin_service),
):
    """
    Get all registrations, newest first.
    Optional: ?q=smith to filter by ID, name or paper ID.
    """
    return service.list(q)


# ==============================================================================
# 2. CSV EXPORT
# ==============================================================================
@router.get("/export")
def export_registrations(service: AdminService = Depends(get_admin_service)):
    """Download every registration as a CSV attachment"""
    logger.info("📤 [Admin] CSV export requested")
    return StreamingResponse(
        service.export(),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="registrations.csv"'},
    )


# ==============================================================================
# 3. MARK PAID / UNPAID
# ==============================================================================
@router.post("/mark-paid/{registration_id}", response_model=MarkPaidResponse)
def mark_paid(
    registration_id: str,
    body: MarkPaidRequest,
    service: AdminService = Depends(get_admin_service),
):
    record = service.mark_paid(registration_id, body.paid)
    return MarkPaidResponse(registration=record)
