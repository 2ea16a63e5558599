import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, List, Optional

from pydantic import TypeAdapter, ValidationError

from conference_portal.models.registration import Registration

logger = logging.getLogger(__name__)

_records_adapter = TypeAdapter(List[Registration])


class RecordStore:
    """
    Flat-file store: the whole collection lives in one JSON array.

    Every mutation is load -> modify -> save. Use transaction() so that the
    cycle runs under the store lock and concurrent requests cannot lose
    each other's writes.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.RLock()

    def _init_file(self):
        """Create the data directory and an empty collection"""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("[]", encoding="utf-8")
        logger.info(f"📦 Initialised empty registration store at {self.path}")

    def _quarantine(self):
        """Move unreadable data aside once; the next load sees an empty store"""
        stamp = datetime.now().strftime("%Y%m%d%H%M%S%f")
        backup = self.path.with_name(f"{self.path.name}.corrupt-{stamp}")
        try:
            os.replace(self.path, backup)
            logger.warning(f"⚠️ Corrupt store moved to {backup}")
        except OSError as e:
            logger.error(f"❌ Could not move corrupt store aside: {e}")
            return
        self._init_file()

    def load(self) -> List[Registration]:
        """
        Return every record in insertion order.

        A missing file is created empty. Unreadable or malformed content is
        logged and treated as an empty collection.
        """
        with self._lock:
            if not self.path.exists():
                self._init_file()
                return []

            try:
                raw = self.path.read_text(encoding="utf-8")
            except OSError as e:
                logger.error(f"❌ Error reading registration store: {e}")
                return []

            try:
                return _records_adapter.validate_python(json.loads(raw or "[]"))
            except (json.JSONDecodeError, ValidationError) as e:
                logger.error(f"❌ Registration store is malformed, serving empty data: {e}")
                self._quarantine()
                return []

    def save(self, records: List[Registration]):
        """Replace the persisted collection; readers see either old or new data"""
        payload = json.dumps(
            [r.model_dump(mode="json") for r in records],
            indent=2,
            ensure_ascii=False,
        )
        with self._lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(payload)
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise

    @contextmanager
    def transaction(self) -> Iterator[List[Registration]]:
        """
        Yield the loaded collection for in-place changes and save it on exit.

        Nothing is written if the block raises.
        """
        with self._lock:
            records = self.load()
            yield records
            self.save(records)

    def get(self, registration_id: str) -> Optional[Registration]:
        for record in self.load():
            if record.id == registration_id:
                return record
        return None

    @staticmethod
    def find_index(records: List[Registration], registration_id: str) -> int:
        for idx, record in enumerate(records):
            if record.id == registration_id:
                return idx
        return -1
