"""
PaymentExecutor: mock execution and status lookup.

No money moves. execute() validates the batch, writes one terminal
ExecutionRecord to the ledger and returns it. Every payment is reported as
completed, with a message that says whether the run was simulate-only.

State machine:
    (created) → COMPLETED   synchronously, regardless of simulate_only
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Callable

from models.domain import ExecutionRecord, ExecutionStatus, PaymentStatusEntry
from models.errors import ExecutionNotFound, InvalidPayments
from services.ledger import ExecutionLedger

logger = logging.getLogger("airipay.services.executor")

SIMULATED_MESSAGE = "Simulated execution only (no real transfer)."
EXECUTED_MESSAGE  = "Executed in demo environment."


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _external_invoice_id(payment: Any) -> str | None:
    """Pass through a non-empty externalInvoiceId, else None."""
    if not isinstance(payment, dict):
        return None
    return payment.get("externalInvoiceId") or None


class PaymentExecutor:
    def __init__(
        self,
        ledger: ExecutionLedger,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._ledger = ledger
        self._clock  = clock

    @property
    def ledger(self) -> ExecutionLedger:
        return self._ledger

    async def execute(
        self,
        payments: Any,
        simulate_only: bool = False,
        run_id: str | None = None,
    ) -> ExecutionRecord:
        if not isinstance(payments, list) or not payments:
            raise InvalidPayments()

        execution_id = f"exec_{uuid.uuid4().hex}"
        now = self._clock()
        message = SIMULATED_MESSAGE if simulate_only else EXECUTED_MESSAGE
        verb = "simulated" if simulate_only else "completed"

        record = ExecutionRecord(
            execution_id=execution_id,
            status=ExecutionStatus.COMPLETED,
            summary=f"Execution {verb} for {len(payments)} payments.",
            created_at=now,
            completed_at=now,
            simulate_only=simulate_only,
            payments_status=tuple(
                PaymentStatusEntry(
                    external_invoice_id=_external_invoice_id(p),
                    status=ExecutionStatus.COMPLETED,
                    message=message,
                )
                for p in payments
            ),
            run_id=run_id,
            payments=tuple(payments),
        )
        await self._ledger.record(record)

        logger.info(
            "execution %s recorded: payments=%d simulate_only=%s run_id=%s",
            execution_id, len(payments), simulate_only, run_id,
        )
        return record

    async def status(self, execution_id: str) -> ExecutionRecord:
        record = await self._ledger.lookup(execution_id)
        if record is None:
            logger.info("status lookup miss: %s", execution_id)
            raise ExecutionNotFound(execution_id)
        return record
