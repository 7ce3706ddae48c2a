import datetime
import logging
from typing import Iterable, Iterator

from backend.schemas.billing import BillingDraft, CatalogEntry, LineItem, PatientRecord, PriceOption, Sex
from backend.seed.catalog_seed import load_catalog, load_roster
from backend.services.catalog import filter_catalog, find_test
from backend.services.errors import (
    IncompleteSelection,
    IndexOutOfRange,
    InvalidSelection,
    ValidationCheck,
    ValidationError,
)
from backend.services.report import compute_total

logger = logging.getLogger(__name__)

PATIENT_FIELDS = ("name", "age", "sex", "date")

VALIDATION_MESSAGES = {
    ValidationCheck.IDENTITY: "Please fill all patient details",
    ValidationCheck.DOCTORS: "Please select at least one referring doctor",
    ValidationCheck.TESTS: "Please add at least one diagnostic test",
}


def _as_date(value: datetime.date | str) -> datetime.date:
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    return datetime.date.fromisoformat(value)


class BillingRecordBuilder:
    """Holds the bill being entered and the pending test selection.

    Every mutation either applies fully or raises a ``BillingError`` and
    leaves the record untouched. ``finalize`` hands back an immutable copy,
    after which the live record can keep being edited.
    """

    def __init__(
        self,
        catalog: Iterable[CatalogEntry] | None = None,
        roster: Iterable[str] | None = None,
        today: datetime.date | None = None,
    ):
        self.catalog: tuple[CatalogEntry, ...] = tuple(catalog) if catalog is not None else load_catalog()
        self.roster: tuple[str, ...] = tuple(roster) if roster is not None else load_roster()
        self.record = BillingDraft(date=today or datetime.date.today())
        self._candidate = ""
        self._price: int | None = None
        self._variant = ""

    # -- patient fields and doctors -------------------------------------------

    def set_field(self, field: str, value) -> None:
        if field not in PATIENT_FIELDS:
            raise ValueError(f"Unknown patient field: {field!r}")
        if field in ("name", "age"):
            value = "" if value is None else str(value)
        setattr(self.record, field, value)

    def toggle_doctor(self, doctor: str) -> bool:
        """Flip membership of ``doctor`` and return whether it is now selected."""
        doctors = self.record.referred_doctors
        if doctor in doctors:
            doctors.remove(doctor)
            return False
        doctors.append(doctor)
        return True

    def has_doctor(self, doctor: str) -> bool:
        return doctor in self.record.referred_doctors

    # -- test selection -------------------------------------------------------

    @property
    def candidate(self) -> str:
        return self._candidate

    @property
    def pending_price(self) -> int | None:
        return self._price

    @property
    def pending_variant(self) -> str:
        return self._variant

    @property
    def candidate_entry(self) -> CatalogEntry | None:
        return find_test(self.catalog, self._candidate)

    @property
    def price_options(self) -> tuple[PriceOption, ...]:
        entry = self.candidate_entry
        return entry.prices if entry else ()

    def select_test_candidate(self, test_name: str) -> None:
        self._candidate = test_name or ""
        self._price = None
        self._variant = ""

    def select_price_for_candidate(self, price: int) -> str:
        """Pick one of the candidate's prices and return the variant it resolves to."""
        entry = self.candidate_entry
        if entry is None:
            raise InvalidSelection("Please select a valid test before choosing a price")
        option = entry.option_for(price)
        if option is None:
            raise InvalidSelection(f"{price} is not a price option for {entry.name}")
        self._price = option.price
        self._variant = option.variant or ""
        return self._variant

    def commit_test(self) -> LineItem:
        if not self._candidate or self._price is None:
            raise IncompleteSelection()
        item = LineItem(name=self._candidate, price=self._price, variant=self._variant)
        self.record.selected_tests.append(item)
        self._candidate = ""
        self._price = None
        self._variant = ""
        logger.debug("Added %s at %d (%s)", item.name, item.price, item.variant or "no variant")
        return item

    def remove_test(self, index: int) -> LineItem:
        tests = self.record.selected_tests
        if not 0 <= index < len(tests):
            raise IndexOutOfRange(f"No test at position {index}")
        item = tests.pop(index)
        logger.debug("Removed %s from position %d", item.name, index)
        return item

    def compute_total(self) -> int:
        return compute_total(self.record.selected_tests)

    def filter_catalog(self, query: str | None) -> Iterator[CatalogEntry]:
        return filter_catalog(self.catalog, query)

    # -- handoff --------------------------------------------------------------

    def _identity_complete(self) -> bool:
        record = self.record
        if not record.name or not record.sex:
            return False
        if not record.age.strip().isdecimal():
            return False
        try:
            Sex(record.sex)
            _as_date(record.date)
        except (TypeError, ValueError):
            return False
        return True

    def _fail(self, check: ValidationCheck) -> ValidationError:
        logger.debug("Billing record incomplete: %s check failed", check.value)
        return ValidationError(check, VALIDATION_MESSAGES[check])

    def finalize(self) -> PatientRecord:
        """Check the record (identity, then doctors, then tests) and return a frozen copy."""
        record = self.record
        if not self._identity_complete():
            raise self._fail(ValidationCheck.IDENTITY)
        if not record.referred_doctors:
            raise self._fail(ValidationCheck.DOCTORS)
        if not record.selected_tests:
            raise self._fail(ValidationCheck.TESTS)

        snapshot = PatientRecord(
            name=record.name,
            age=record.age.strip(),
            sex=Sex(record.sex),
            date=_as_date(record.date),
            referred_doctors=tuple(record.referred_doctors),
            selected_tests=tuple(record.selected_tests),
        )
        logger.info(
            "Finalized bill for %s: %d test(s), total %d",
            snapshot.name,
            len(snapshot.selected_tests),
            self.compute_total(),
        )
        return snapshot
