"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config.settings import settings
from ukcalc.api.routes import router
from ukcalc.calculators.models import InvalidInputError
from ukcalc.calculators.tax_data import TAX_YEARS, UnknownTaxYearError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup: configure logging and report the loaded tax years."""
    logging.basicConfig(level=settings.log_level)
    logger.info(
        "Starting up with tax years %s (default %s)",
        ", ".join(sorted(TAX_YEARS)),
        settings.default_tax_year,
    )

    yield

    logger.info("Shutting down...")


async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    """Negative amounts and unknown options are client errors."""
    logger.info("Invalid input on %s: %s", request.url.path, exc)
    return JSONResponse({"error": str(exc)}, status_code=422)


async def unknown_tax_year_handler(request: Request, exc: UnknownTaxYearError) -> JSONResponse:
    """Unknown tax year keys are not found."""
    return JSONResponse({"error": str(exc)}, status_code=404)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(title="UK Tax Engine", lifespan=lifespan)
    app.add_exception_handler(InvalidInputError, invalid_input_handler)  # type: ignore[arg-type]
    app.add_exception_handler(UnknownTaxYearError, unknown_tax_year_handler)  # type: ignore[arg-type]
    app.include_router(router)
    return app
