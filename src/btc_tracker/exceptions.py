"""Custom exceptions for the Bitcoin purchase tracker.

The normalizers and the metrics calculator never raise; these exceptions
belong to the entry workflow and the price layer that sit around them.
"""


class TrackerError(Exception):
    """Base exception for all tracker errors."""


class PriceUnavailableError(TrackerError):
    """Raised when the price source cannot deliver a usable USD price."""


class InvalidInputError(TrackerError):
    """Raised when user-typed form values fail validation.

    Args:
        field_errors: Mapping of form field name to a user-facing message.
    """

    def __init__(self, field_errors: dict[str, str]) -> None:
        self.field_errors = dict(field_errors)
        fields = ", ".join(sorted(self.field_errors))
        super().__init__(f"Invalid input for: {fields}")


class InvalidPurchaseError(InvalidInputError):
    """Raised when purchase form values cannot produce a valid record."""


class InvalidSettingsError(InvalidInputError):
    """Raised when settings form values are negative or not numbers."""
