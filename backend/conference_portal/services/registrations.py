import logging
from typing import Optional

from conference_portal.core.errors import MissingField, NotFound
from conference_portal.core.security import generate_id
from conference_portal.models.registration import Registration, utcnow
from conference_portal.schemas import RegistrationForm, RegistrationResult
from conference_portal.services.fees import lookup_fee
from conference_portal.services.record_store import RecordStore
from conference_portal.services.uploads import IncomingFile, UploadHandler, UploadPolicy, url_for

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("category", "region", "name", "email", "mobile")


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class RegistrationService:
    def __init__(self, store: RecordStore, uploads: UploadHandler, paper_policy: UploadPolicy):
        self.store = store
        self.uploads = uploads
        self.paper_policy = paper_policy

    def register(self, form: RegistrationForm, paper: Optional[IncomingFile] = None) -> RegistrationResult:
        """
        Create a registration.

        Fields and the fee selection are checked before the paper is
        written, so a rejected request leaves no file and no record behind.
        """
        values = {field: _clean(getattr(form, field)) for field in REQUIRED_FIELDS}
        missing = [field for field, value in values.items() if not value]
        if missing:
            logger.warning(f"Registration rejected, missing: {', '.join(missing)}")
            raise MissingField()

        fee = lookup_fee(values["category"], values["region"])

        if paper is not None and paper.is_empty:
            paper = None
        stored = self.uploads.store(paper, self.paper_policy) if paper else None

        record = Registration(
            id=generate_id(),
            created_at=utcnow(),
            category=values["category"],
            region=values["region"],
            currency=fee.currency,
            amount=fee.amount,
            paper_id=_clean(form.paperId),
            name=values["name"],
            organization=_clean(form.organization),
            email=values["email"],
            mobile=values["mobile"],
            paper_filename=stored.filename if stored else None,
            paper_original=stored.original if stored else None,
        )

        with self.store.transaction() as records:
            records.append(record)

        logger.info(f"✅ Registered {record.id} ({record.category}/{record.region}, {fee.currency} {fee.amount})")

        return RegistrationResult(
            id=record.id,
            currency=record.currency,
            amount=record.amount,
            file=url_for(record.paper_filename),
        )

    def get(self, registration_id: str) -> Registration:
        record = self.store.get(registration_id)
        if record is None:
            raise NotFound()
        return record
