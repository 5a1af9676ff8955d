"""Entry workflow validation for purchase and settings forms."""

from btc_tracker.entry.purchase_form import PurchaseEntry, validate_purchase_input
from btc_tracker.entry.settings_form import validate_interest_rate, validate_manual_balance

__all__ = [
    "PurchaseEntry",
    "validate_interest_rate",
    "validate_manual_balance",
    "validate_purchase_input",
]
