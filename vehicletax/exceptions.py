"""Custom exceptions for the vehicle tax estimator."""

from decimal import Decimal


class VehicleTaxError(Exception):
    """Base exception for vehicle tax estimation errors."""


class InvalidInputError(VehicleTaxError):
    """Raised when a user-supplied value is missing, non-numeric or out of range."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(message)


class OutOfDomainError(VehicleTaxError):
    """Raised when a table lookup falls outside the range its bands cover.

    Validated tables cover every non-negative age and positive cost, so this
    indicates a programming defect rather than bad user input.
    """

    def __init__(self, value: Decimal, domain: str):
        self.value = value
        self.domain = domain
        super().__init__(f"Value {value} is outside the {domain} domain")


class ExplanationError(VehicleTaxError):
    """Raised when the generated prose explanation cannot be produced."""

    def __init__(self, message: str):
        super().__init__(f"Explanation failed: {message}")
