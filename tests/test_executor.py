"""
Tests for ExecutionLedger and PaymentExecutor.

  A. Validation
  B. Record contents
  C. Ledger semantics
"""
from __future__ import annotations

from datetime import datetime, timezone

import pytest
from freezegun import freeze_time

from models.domain import ExecutionRecord, ExecutionStatus
from models.errors import ExecutionNotFound, InvalidPayments
from services.executor import EXECUTED_MESSAGE, SIMULATED_MESSAGE, PaymentExecutor
from services.ledger import ExecutionLedger

FIXED_NOW = datetime(2026, 3, 1, 10, 0, tzinfo=timezone.utc)


def _make_executor(clock=None) -> tuple[PaymentExecutor, ExecutionLedger]:
    ledger = ExecutionLedger()
    executor = PaymentExecutor(ledger, clock=clock) if clock else PaymentExecutor(ledger)
    return executor, ledger


# ── A. Validation ─────────────────────────────────────────────────────────────

class TestValidation:

    @pytest.mark.parametrize("bad", [None, [], {}, "INV-1", 3, {"externalInvoiceId": "INV-1"}])
    async def test_invalid_payments_rejected_without_ledger_write(self, bad):
        executor, ledger = _make_executor()
        with pytest.raises(InvalidPayments) as exc_info:
            await executor.execute(bad)
        assert exc_info.value.message == "Invalid or missing 'payments' (must be non-empty array)"
        assert len(ledger) == 0


# ── B. Record contents ────────────────────────────────────────────────────────

class TestRecord:

    async def test_simulate_only_record(self):
        executor, _ = _make_executor(clock=lambda: FIXED_NOW)
        record = await executor.execute([{"externalInvoiceId": "INV-1"}], simulate_only=True)

        assert record.execution_id.startswith("exec_")
        assert record.status == ExecutionStatus.COMPLETED
        assert record.summary == "Execution simulated for 1 payments."
        assert record.simulate_only is True
        assert record.created_at == record.completed_at == FIXED_NOW
        [entry] = record.payments_status
        assert entry.external_invoice_id == "INV-1"
        assert entry.status == ExecutionStatus.COMPLETED
        assert entry.message == SIMULATED_MESSAGE

    async def test_real_mode_still_completed(self):
        """Non-simulated runs are also reported as completed in the demo environment."""
        executor, _ = _make_executor()
        record = await executor.execute([{"externalInvoiceId": "A"}, {"externalInvoiceId": "B"}])

        assert record.summary == "Execution completed for 2 payments."
        assert [e.message for e in record.payments_status] == [EXECUTED_MESSAGE] * 2
        assert [e.status for e in record.payments_status] == [ExecutionStatus.COMPLETED] * 2

    @pytest.mark.parametrize("payment", [{}, {"externalInvoiceId": ""}, {"externalInvoiceId": None}, "raw", 7])
    async def test_missing_invoice_id_is_none(self, payment):
        executor, _ = _make_executor()
        record = await executor.execute([payment])
        assert record.payments_status[0].external_invoice_id is None

    async def test_status_entries_keep_input_order(self):
        executor, _ = _make_executor()
        payments = [{"externalInvoiceId": f"INV-{i}"} for i in range(5)]
        record = await executor.execute(payments)
        assert [e.external_invoice_id for e in record.payments_status] == [
            "INV-0", "INV-1", "INV-2", "INV-3", "INV-4",
        ]

    async def test_payments_echoed_and_run_id_kept(self):
        executor, _ = _make_executor()
        payments = [{"externalInvoiceId": "INV-9", "amount": 50, "beneficiary": "ACME"}]
        record = await executor.execute(payments, run_id="run-42")
        assert record.payments == tuple(payments)
        assert record.run_id == "run-42"

    @freeze_time("2026-02-23 09:00:00+00:00")
    async def test_default_clock_is_utc(self):
        executor, _ = _make_executor()
        record = await executor.execute([{}])
        assert record.created_at == datetime(2026, 2, 23, 9, 0, tzinfo=timezone.utc)
        assert record.created_at.tzinfo is not None


# ── C. Ledger semantics ───────────────────────────────────────────────────────

class TestLedger:

    async def test_status_returns_recorded_record(self):
        executor, ledger = _make_executor()
        record = await executor.execute([{"externalInvoiceId": "INV-1"}], simulate_only=True)

        assert len(ledger) == 1
        assert record.execution_id in ledger
        assert await executor.status(record.execution_id) is record
        assert await executor.status(record.execution_id) is record

    async def test_unknown_execution_raises(self):
        executor, _ = _make_executor()
        with pytest.raises(ExecutionNotFound) as exc_info:
            await executor.status("exec_missing")
        assert exc_info.value.status_code == 404
        assert exc_info.value.execution_id == "exec_missing"

    async def test_ids_are_unique(self):
        executor, ledger = _make_executor()
        ids = {(await executor.execute([{}])).execution_id for _ in range(20)}
        assert len(ids) == 20
        assert len(ledger) == 20

    async def test_lookup_missing_returns_none(self):
        ledger = ExecutionLedger()
        assert await ledger.lookup("nope") is None

    async def test_reused_id_overwrites(self):
        ledger = ExecutionLedger()
        first = ExecutionRecord(
            execution_id="exec_1",
            status=ExecutionStatus.COMPLETED,
            summary="first",
            created_at=FIXED_NOW,
            completed_at=FIXED_NOW,
            simulate_only=False,
            payments_status=(),
        )
        second = ExecutionRecord(
            execution_id="exec_1",
            status=ExecutionStatus.COMPLETED,
            summary="second",
            created_at=FIXED_NOW,
            completed_at=FIXED_NOW,
            simulate_only=True,
            payments_status=(),
        )
        await ledger.record(first)
        await ledger.record(second)
        assert len(ledger) == 1
        assert (await ledger.lookup("exec_1")).summary == "second"
