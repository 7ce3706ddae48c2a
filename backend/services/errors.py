from enum import Enum


class ValidationCheck(str, Enum):
    IDENTITY = "identity"
    DOCTORS = "doctors"
    TESTS = "tests"


class BillingError(Exception):
    """Base class for recoverable billing workflow errors."""

    default_message = "Billing operation failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(BillingError):
    """Raised by finalize when the record is incomplete. Only the first failing check is reported."""

    def __init__(self, check: ValidationCheck, message: str):
        self.check = check
        super().__init__(message)


class InvalidSelection(BillingError):
    default_message = "Selected price is not offered for this test"


class IncompleteSelection(BillingError):
    default_message = "Please select a test and price"


class IndexOutOfRange(BillingError):
    default_message = "No test at that position"


class MissingHandoff(BillingError):
    default_message = "No billing record available, please fill the billing form first"
