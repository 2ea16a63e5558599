import json
import logging
from typing import Optional, Tuple

from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile as StarletteUploadFile

from conference_portal.api.deps import get_payment_service
from conference_portal.core.errors import Internal, MissingField, PortalError
from conference_portal.schemas import PaymentConfirmationRequest, PaymentConfirmationResult, PaymentLink
from conference_portal.services.payments import PaymentService
from conference_portal.services.uploads import IncomingFile

router = APIRouter()
logger = logging.getLogger(__name__)

PROOF_FIELD = "screenshot"


async def parse_confirmation(
    request: Request, max_proof_bytes: int
) -> Tuple[PaymentConfirmationRequest, Optional[IncomingFile]]:
    """Read either a JSON body or a multipart form with an optional screenshot"""
    content_type = request.headers.get("content-type", "").lower()

    if content_type.startswith("multipart/form-data") or content_type.startswith(
        "application/x-www-form-urlencoded"
    ):
        form = await request.form()
        fields = {k: v for k, v in form.items() if isinstance(v, str)}
        proof = None
        upload = form.get(PROOF_FIELD)
        if isinstance(upload, StarletteUploadFile):
            proof = IncomingFile(
                filename=upload.filename,
                content_type=upload.content_type,
                data=await upload.read(max_proof_bytes + 1),
            )
        return PaymentConfirmationRequest(**fields), proof

    body = await request.body()
    if not body:
        return PaymentConfirmationRequest(), None
    try:
        payload = json.loads(body)
    except json.JSONDecodeError:
        raise MissingField("Request body must be JSON or multipart form data")
    if not isinstance(payload, dict):
        raise MissingField("Request body must be a JSON object")
    # Numeric transaction IDs arrive as JSON numbers; objects, lists and booleans do not count
    fields = {
        k: str(v)
        for k, v in payload.items()
        if isinstance(v, (str, int, float)) and not isinstance(v, bool)
    }
    return PaymentConfirmationRequest(**fields), None


@router.post("/create-payment/{registration_id}", response_model=PaymentLink)
def create_payment(
    registration_id: str,
    service: PaymentService = Depends(get_payment_service),
):
    """Mock payment initiation"""
    return service.create_payment(registration_id)


@router.post("/confirm-payment/{registration_id}", response_model=PaymentConfirmationResult)
async def confirm_payment(
    registration_id: str,
    request: Request,
    service: PaymentService = Depends(get_payment_service),
):
    """
    Confirm a payment for a registration.
    The email must match the one used at registration (case-insensitive).
    """
    try:
        data, proof = await parse_confirmation(request, service.proof_policy.max_bytes)
        return await run_in_threadpool(service.confirm_payment, registration_id, data, proof)
    except PortalError as pe:
        logger.warning(f"Payment confirmation for {registration_id} rejected: {pe.message}")
        raise pe
    except Exception as e:
        logger.error(f"Payment confirmation error: {str(e)}", exc_info=True)
        raise Internal("Payment confirmation failed")
