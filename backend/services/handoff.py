import logging
from typing import MutableMapping

from pydantic import ValidationError as SchemaValidationError

from backend.config import settings
from backend.schemas.billing import PatientRecord
from backend.services.errors import MissingHandoff

logger = logging.getLogger(__name__)


class HandoffChannel:
    """Single key-value slot carrying a finalized record from the form to the report.

    Any mutable mapping works as the store: a plain dict, or ``st.session_state``
    in the Streamlit frontend. The record travels as JSON text so the reader
    always gets an independent copy.
    """

    def __init__(self, store: MutableMapping[str, str], key: str | None = None):
        self.store = store
        self.key = key or settings.handoff_key

    def write(self, snapshot: PatientRecord) -> None:
        self.store[self.key] = snapshot.to_json()
        logger.info("Handed off billing record for %s with %d test(s)", snapshot.name, len(snapshot.selected_tests))

    def read(self) -> PatientRecord:
        raw = self.store.get(self.key)
        if not raw:
            logger.warning("No billing record found under handoff key %r", self.key)
            raise MissingHandoff()
        try:
            return PatientRecord.model_validate_json(raw)
        except SchemaValidationError as exc:
            logger.warning("Discarding unreadable billing record under %r: %s", self.key, exc)
            raise MissingHandoff() from exc

    def has_snapshot(self) -> bool:
        return bool(self.store.get(self.key))
