import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ygocli.api import (
    cards_router,
    collection_router,
    health_router,
    wishlist_router,
)
from ygocli.config import VERSION, settings
from ygocli.models.failure import ApiResponse, KnownError

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    version=VERSION,
)

app.include_router(cards_router)
app.include_router(collection_router)
app.include_router(health_router)
app.include_router(wishlist_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    """Map store and lookup failures to their status code and failure envelope."""
    logger.info("%s: %s", type(exc).__name__, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(mode="json"),
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error: %s", exc)
    return JSONResponse(
        status_code=500,
        content=ApiResponse.unknown_failure(detail=type(exc).__name__).model_dump(mode="json"),
    )
