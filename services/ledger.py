"""
ExecutionLedger: process-lifetime store of execution records.

Records are frozen dataclasses written once and never updated, so repeated
lookups of the same id always return the same data. There is no eviction,
expiry or deletion; everything is lost on restart.
"""

from __future__ import annotations

import asyncio
import logging

from models.domain import ExecutionRecord

logger = logging.getLogger("airipay.services.ledger")


class ExecutionLedger:
    """In-memory execution store owned by the app and injected into handlers."""

    def __init__(self) -> None:
        self._by_id: dict[str, ExecutionRecord] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, execution_id: object) -> bool:
        return execution_id in self._by_id

    async def record(self, execution: ExecutionRecord) -> None:
        """Store a record under its execution_id; a reused id overwrites."""
        async with self._lock:
            if execution.execution_id in self._by_id:
                logger.warning("ledger overwrite for %s", execution.execution_id)
            self._by_id[execution.execution_id] = execution

    async def lookup(self, execution_id: str) -> ExecutionRecord | None:
        return self._by_id.get(execution_id)
