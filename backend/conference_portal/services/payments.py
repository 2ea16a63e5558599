import logging
from typing import Optional

from conference_portal.core.errors import EmailMismatch, MissingField, NotFound
from conference_portal.models.registration import utcnow
from conference_portal.schemas import (
    PaymentConfirmationRequest,
    PaymentConfirmationResult,
    PaymentLink,
)
from conference_portal.services.record_store import RecordStore
from conference_portal.services.uploads import IncomingFile, UploadHandler, UploadPolicy, url_for

logger = logging.getLogger(__name__)


class PaymentService:
    def __init__(
        self,
        store: RecordStore,
        uploads: UploadHandler,
        proof_policy: UploadPolicy,
        proof_required: bool = False,
    ):
        self.store = store
        self.uploads = uploads
        self.proof_policy = proof_policy
        self.proof_required = proof_required

    def create_payment(self, registration_id: str) -> PaymentLink:
        """Mock payment initiation; no gateway is contacted"""
        record = self.store.get(registration_id)
        if record is None:
            raise NotFound()
        return PaymentLink(url=f"/mock-pay/{record.id}", amount=record.amount, currency=record.currency)

    def confirm_payment(
        self,
        registration_id: str,
        data: PaymentConfirmationRequest,
        proof: Optional[IncomingFile] = None,
    ) -> PaymentConfirmationResult:
        transaction_id = (data.transactionId or "").strip()
        method = (data.method or "").strip()
        email = (data.email or "").strip()

        if not transaction_id or not method or not email:
            raise MissingField("Missing transaction ID, payment method, or email")

        if proof is not None and proof.is_empty:
            proof = None
        if proof is None and self.proof_required:
            raise MissingField("Payment proof screenshot is required")

        with self.store.transaction() as records:
            idx = self.store.find_index(records, registration_id)
            if idx == -1:
                raise NotFound()

            record = records[idx]
            if record.email.lower() != email.lower():
                logger.warning(f"Payment confirmation for {registration_id} rejected: email mismatch")
                raise EmailMismatch()

            # Checks passed; only now touch the upload directory
            stored = self.uploads.store(proof, self.proof_policy) if proof else None

            record.paid = True
            record.paid_at = utcnow()
            record.transaction_id = transaction_id
            record.payment_method = method
            record.payer_email = email
            if stored:
                record.payment_proof_filename = stored.filename
                record.payment_proof_original = stored.original

        logger.info(f"💳 Payment confirmed for {record.id} via {method} (txn {transaction_id})")

        return PaymentConfirmationResult(
            id=record.id,
            paid_at=record.paid_at,
            transactionId=transaction_id,
            method=method,
            email=email,
            proof=url_for(record.payment_proof_filename),
        )
