from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from card_statements.api.middleware.error_handler import (
    handle_generic_error,
    handle_statement_processing_error,
    handle_validation_error,
)
from card_statements.api.middleware.logging import RequestLoggingMiddleware
from card_statements.api.v1 import router as v1_router
from card_statements.api.v1.health import router as health_router
from card_statements.config import settings
from card_statements.core.exceptions import StatementProcessingError
from card_statements.core.logging_config import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level, json_format=settings.log_json)
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Credit Card Statement Parser API",
        description="Extracts expense lines from Argentine credit card statement PDFs",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Add request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    # Register exception handlers (order matters - most specific first)
    app.add_exception_handler(StatementProcessingError, handle_statement_processing_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_generic_error)

    # Register routers
    app.include_router(health_router)
    app.include_router(v1_router)

    return app


app = create_app()
