"""
Exception hierarchy for the rail router.

Every error carries the HTTP status it maps to, so the API layer can render
any of them with a single handler as {"error": message}.
"""

from __future__ import annotations


class PaymentRoutingError(Exception):
    """Base exception for rail router errors."""

    status_code: int = 500
    default_message: str = "Payment routing error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidAmount(PaymentRoutingError):
    """Simulate request with a missing, non-numeric or non-positive amount."""
    status_code = 400
    default_message = "Invalid or missing 'amount' (must be > 0 number)"


class InvalidPayments(PaymentRoutingError):
    """Execute request whose payments field is missing, not a list, or empty."""
    status_code = 400
    default_message = "Invalid or missing 'payments' (must be non-empty array)"


class ExecutionNotFound(PaymentRoutingError):
    status_code = 404
    default_message = "Execution not found"

    def __init__(self, execution_id: str) -> None:
        self.execution_id = execution_id
        super().__init__()


class UnknownRail(PaymentRoutingError):
    status_code = 404

    def __init__(self, rail_id: str) -> None:
        self.rail_id = rail_id
        super().__init__(f"Unknown rail '{rail_id}'")


class NoQuotesAvailable(PaymentRoutingError):
    """select_recommendation called with an empty quote list."""
    default_message = "No rail quotes available to select from"
