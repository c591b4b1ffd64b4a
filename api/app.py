"""
FastAPI application factory for the AiriPay rail router.

Usage:
    uvicorn api.app:app --reload --port 4000
    python run.py                               # configures logging, honours PORT
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.auth import Authorizer, build_authorizer
from api.routers import executions, health, rails, simulation
from models.errors import InvalidAmount, InvalidPayments, PaymentRoutingError
from routing.simulator import PaymentSimulator
from services.executor import PaymentExecutor

logger = logging.getLogger("airipay.api")

# Schema failures on these fields report the same message as the domain check
_FIELD_ERRORS: dict[str, type[PaymentRoutingError]] = {
    "amount":   InvalidAmount,
    "payments": InvalidPayments,
}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    for err in errors:
        field = err.get("loc", ())[-1:] or ("",)
        if field[0] in _FIELD_ERRORS:
            return _FIELD_ERRORS[field[0]].default_message
    parts = []
    for err in errors:
        where = ".".join(str(p) for p in err.get("loc", ())[1:]) or "body"
        parts.append(f"{where}: {err.get('msg', 'invalid')}")
    return "Invalid request body: " + "; ".join(parts)


def _register_error_handlers(app: FastAPI) -> None:

    @app.exception_handler(PaymentRoutingError)
    async def routing_error_handler(request: Request, exc: PaymentRoutingError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        else:
            logger.info("%s %s rejected (%d): %s",
                        request.method, request.url.path, exc.status_code, exc.message)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = _validation_message(exc)
        logger.info("%s %s invalid body: %s", request.method, request.url.path, message)
        return _error(400, message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error(exc.status_code, str(exc.detail))


def create_app(
    simulator: PaymentSimulator,
    executor: PaymentExecutor,
    authorizer: Authorizer,
    service_name: str = "airipay_bank_orchestration",
    cors_origins: list[str] | None = None,
    lifespan=None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    All service instances are stored on app.state so routers can retrieve
    them via request.app.state.<name>.
    """
    app = FastAPI(
        title="AiriPay Rail Router API",
        version="1.0",
        lifespan=lifespan,
    )

    # Inject service instances
    app.state.simulator    = simulator
    app.state.executor     = executor
    app.state.authorizer   = authorizer
    app.state.service_name = service_name

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins or ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(rails.router)
    app.include_router(simulation.router)
    app.include_router(executions.router)

    return app


# ── Module-level app for `uvicorn api.app:app` ────────────────────────────────

def _make_default_app() -> FastAPI:
    from config.settings import settings
    from services.ledger import ExecutionLedger

    return create_app(
        simulator=PaymentSimulator(),
        executor=PaymentExecutor(ExecutionLedger()),
        authorizer=build_authorizer(settings),
        service_name=settings.service_name,
        cors_origins=settings.cors_origins,
    )


app = _make_default_app()
