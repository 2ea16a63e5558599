from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Registration(BaseModel):
    """One participant registration as persisted in the JSON store"""

    id: str
    created_at: datetime
    category: str
    region: str
    currency: str
    amount: int
    paper_id: Optional[str] = None
    name: str
    organization: Optional[str] = None
    email: str
    mobile: str
    paper_filename: Optional[str] = None
    paper_original: Optional[str] = None

    # Payment (older data files store paid as 0/1)
    paid: bool = False
    paid_at: Optional[datetime] = None
    transaction_id: Optional[str] = None
    payment_method: Optional[str] = None
    payer_email: Optional[str] = None
    payment_proof_filename: Optional[str] = None
    payment_proof_original: Optional[str] = None

    def __repr__(self):
        return f"<Registration {self.id} {self.name} ({self.email})>"


# Column order used by the admin CSV export
EXPORT_COLUMNS = list(Registration.model_fields.keys())
