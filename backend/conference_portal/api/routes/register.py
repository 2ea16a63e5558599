from fastapi import APIRouter, UploadFile, File, Form, Depends
from typing import Optional
import logging

from conference_portal.api.deps import get_registration_service
from conference_portal.core.errors import Internal, PortalError
from conference_portal.models.registration import Registration
from conference_portal.schemas import RegistrationForm, RegistrationResult
from conference_portal.services.registrations import RegistrationService
from conference_portal.services.uploads import IncomingFile, UploadPolicy

router = APIRouter()
logger = logging.getLogger(__name__)


def read_upload(upload: Optional[UploadFile], policy: UploadPolicy) -> Optional[IncomingFile]:
    """
    Pull an UploadFile into memory (sync endpoints run in the threadpool).
    Reads one byte past the policy limit, enough for validation to reject it.
    """
    if upload is None:
        return None
    return IncomingFile(
        filename=upload.filename,
        content_type=upload.content_type,
        data=upload.file.read(policy.max_bytes + 1),
    )


@router.post("/register", response_model=RegistrationResult)
def register(
    category: Optional[str] = Form(None),
    region: Optional[str] = Form(None),
    paperId: Optional[str] = Form(None),
    name: Optional[str] = Form(None),
    organization: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    mobile: Optional[str] = Form(None),
    paper: Optional[UploadFile] = File(None),
    service: RegistrationService = Depends(get_registration_service),
):
    """
    Register a participant. The paper PDF is optional.
    """
    form = RegistrationForm(
        category=category,
        region=region,
        paperId=paperId,
        name=name,
        organization=organization,
        email=email,
        mobile=mobile,
    )

    try:
        return service.register(form, read_upload(paper, service.paper_policy))
    except PortalError as pe:
        logger.warning(f"Registration rejected: {pe.message}")
        raise pe
    except Exception as e:
        logger.error(f"Registration error: {str(e)}", exc_info=True)
        raise Internal("Registration failed")


@router.get("/registrations/{registration_id}", response_model=Registration)
def get_registration(
    registration_id: str,
    service: RegistrationService = Depends(get_registration_service),
):
    return service.get(registration_id)


# Alias used by the participant-facing pages
@router.get("/participant/{registration_id}", response_model=Registration)
def get_participant(
    registration_id: str,
    service: RegistrationService = Depends(get_registration_service),
):
    return service.get(registration_id)
