"""
AiriPay rail router: server entrypoint.

Configures structlog over stdlib logging, then serves the default FastAPI
app (simulator, in-memory execution ledger, configured authorizer) with uvicorn.

Usage:
    python run.py
    PORT=4001 python run.py      # override port (default AIRIPAY_PORT / 4000)
    AIRIPAY_API_KEY=secret python run.py

Everything lives in process memory; a restart forgets every execution.
"""

from __future__ import annotations

import logging
import os
import sys

import structlog
import uvicorn

from config.settings import settings

# ── Logging setup ──────────────────────────────────────────────────────────────
structlog.configure(
    processors=[
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    stream=sys.stdout,
)

log = structlog.get_logger("airipay.run")


def main() -> None:
    from api.app import app

    port = int(os.environ.get("PORT", settings.port))
    log.info(
        "services built",
        rails=[r.id for r in app.state.simulator.catalog],
        authorizer=type(app.state.authorizer).__name__,
    )
    log.info("AiriPay bank orchestration API listening", host=settings.host, port=port)
    uvicorn.run(app, host=settings.host, port=port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
