import csv
import io
import logging
from typing import Iterator, List, Optional

from conference_portal.core.errors import NotFound
from conference_portal.models.registration import EXPORT_COLUMNS, Registration, utcnow
from conference_portal.schemas import AdminRegistration
from conference_portal.services.record_store import RecordStore
from conference_portal.services.uploads import url_for

logger = logging.getLogger(__name__)


def _csv_value(value) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


class AdminService:
    def __init__(self, store: RecordStore):
        self.store = store

    def _newest_first(self) -> List[Registration]:
        return list(reversed(self.store.load()))

    def list(self, q: Optional[str] = None) -> List[AdminRegistration]:
        """
        All registrations, newest first, with download URLs attached.
        Optional ?q= matches id + name + paper_id, case-insensitive.
        """
        rows = self._newest_first()

        needle = (q or "").lower()
        if needle:
            rows = [
                r for r in rows
                if needle in (r.id + r.name + (r.paper_id or "")).lower()
            ]

        return [
            AdminRegistration(
                **r.model_dump(),
                paper_url=url_for(r.paper_filename),
                payment_proof_url=url_for(r.payment_proof_filename),
            )
            for r in rows
        ]

    def export(self) -> Iterator[str]:
        """Yield the CSV export one line at a time"""
        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")

        def flush() -> str:
            line = buffer.getvalue()
            buffer.seek(0)
            buffer.truncate(0)
            return line

        yield ",".join(EXPORT_COLUMNS) + "\n"

        for record in self._newest_first():
            data = record.model_dump(mode="json")
            writer.writerow([_csv_value(data[column]) for column in EXPORT_COLUMNS])
            yield flush()

    def mark_paid(self, registration_id: str, paid: bool) -> Registration:
        """Admin override of the paid flag; payment details are left as they are"""
        with self.store.transaction() as records:
            idx = self.store.find_index(records, registration_id)
            if idx == -1:
                raise NotFound()

            record = records[idx]
            record.paid = paid
            record.paid_at = utcnow() if paid else None

        logger.info(f"🛠️ [Admin] Marked {registration_id} as {'paid' if paid else 'unpaid'}")
        return record
