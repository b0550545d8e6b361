import uuid
from datetime import datetime, timezone

from ratecon.core.form_state import FormState
from ratecon.services.load_store.base import LoadStore, to_load_record


class InMemoryLoadStore(LoadStore):
    """Process-local load store. Inspectable in tests via `records`."""

    def __init__(self):
        self._records: dict[str, dict] = {}

    def save(self, form: FormState) -> dict:
        record = {
            "id": str(uuid.uuid4()),
            "created_at": datetime.now(timezone.utc).isoformat(),
            **to_load_record(form),
        }
        self._records[record["id"]] = record
        return dict(record)

    def get(self, load_id: str) -> dict | None:
        record = self._records.get(load_id)
        return dict(record) if record else None

    @property
    def records(self) -> list[dict]:
        return [dict(r) for r in self._records.values()]

    def reset(self):
        self._records.clear()
