"""FastAPI application for the bonding-curve estimator and validator."""

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from bonding_curve import __version__
from bonding_curve.api.endpoints import router
from bonding_curve.api.schemas import ErrorResponse
from bonding_curve.config import DEBUG, HOST, LOG_LEVEL, PORT, configure_logging
from bonding_curve.errors import BondingCurveError

logger = structlog.get_logger()

app = FastAPI(
    title="Bonding Curve Engine",
    description="Pricing, inversion and transition validation for logarithmic bonding-curve pools",
    version=__version__,
)


@app.exception_handler(BondingCurveError)
async def bonding_curve_error_handler(request: Request, exc: BondingCurveError) -> JSONResponse:
    """Report domain errors as 422 with the error class as `kind`."""
    logger.warning("request_rejected", path=request.url.path, kind=type(exc).__name__, detail=str(exc))
    body = ErrorResponse(detail=str(exc), kind=type(exc).__name__)
    return JSONResponse(status_code=422, content=body.model_dump())


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the API server.

    Configuration via environment variables:
    - BONDING_CURVE_HOST: Host to bind to (default: 0.0.0.0)
    - BONDING_CURVE_PORT: Port to bind to (default: 8000)
    - BONDING_CURVE_DEBUG: Enable debug/reload mode (default: false)
    - BONDING_CURVE_LOG_LEVEL: Log level (default: INFO)
    """
    configure_logging(LOG_LEVEL)
    uvicorn.run(
        "bonding_curve.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
