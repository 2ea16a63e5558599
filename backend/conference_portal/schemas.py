from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime

from conference_portal.models.registration import Registration


class RegistrationForm(BaseModel):
    """Text fields of the multipart registration form (names as sent by the SPA)"""
    category: Optional[str] = None
    region: Optional[str] = None
    paperId: Optional[str] = None
    name: Optional[str] = None
    organization: Optional[str] = None
    email: Optional[str] = None
    mobile: Optional[str] = None


class RegistrationResult(BaseModel):
    id: str
    currency: str
    amount: int
    file: Optional[str] = None


class PaymentLink(BaseModel):
    url: str
    amount: int
    currency: str


# Accepts both JSON bodies and multipart forms, so every field is optional here
# and presence is checked by the payment service.
class PaymentConfirmationRequest(BaseModel):
    transactionId: Optional[str] = None
    method: Optional[str] = None
    email: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class PaymentConfirmationResult(BaseModel):
    ok: bool = True
    id: str
    paid_at: datetime
    transactionId: str
    method: str
    email: str
    proof: Optional[str] = None


class AdminRegistration(Registration):
    paper_url: Optional[str] = None
    payment_proof_url: Optional[str] = None


class MarkPaidRequest(BaseModel):
    paid: bool


class MarkPaidResponse(BaseModel):
    ok: bool = True
    registration: Registration
