import logging
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cardsieve.api import collection_router, health_router
from cardsieve.config import settings
from cardsieve.models.failure import KnownError, create_known_failure, create_unknown_failure

logger = logging.getLogger(__name__)

try:
    _version = pkg_version("cardsieve")
except PackageNotFoundError:
    _version = "0.0.0"

app = FastAPI(
    title=settings.app_name,
    version=_version,
    debug=settings.debug,
)

app.include_router(collection_router)
app.include_router(health_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    """Render a KnownError as a finalized known_failure envelope."""
    logger.warning(
        "known_error",
        extra={"kind": exc.kind.value, "detail": exc.detail},
    )
    response = create_known_failure(exc)
    return JSONResponse(status_code=exc.status_code, content=response.model_dump(mode="json"))


@app.exception_handler(Exception)
async def unexpected_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Render any other exception as a finalized unknown_failure envelope."""
    logger.exception("unexpected_error", exc_info=exc)
    response = create_unknown_failure(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=response.model_dump(mode="json"),
    )
