# roximity/main.py
import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from roximity.api.v1.api import api_router
from roximity.core.config import settings
from roximity.core.exceptions import NotFoundError, StoreError, ValidationError
from roximity.db.session import init_db
from roximity.utils.time import now_utc_naive

logger = logging.getLogger("roximity.main")

app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ----------------------------------------------------------------------
# Erros do motor -> HTTP
# ----------------------------------------------------------------------
@app.exception_handler(ValidationError)
async def _validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": exc.message},
    )


@app.exception_handler(NotFoundError)
async def _not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": exc.message},
    )


@app.exception_handler(StoreError)
async def _store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": exc.message},
    )


@app.on_event("startup")
async def on_startup() -> None:
    logging.basicConfig(level=settings.LOG_LEVEL.upper())
    logger.info(
        "Starting %s (gap_threshold_seconds=%s clip_to_window=%s)",
        settings.APP_NAME,
        settings.ATTENDANCE_GAP_THRESHOLD_SECONDS,
        settings.ATTENDANCE_CLIP_TO_WINDOW,
    )
    await init_db()


@app.get("/health", tags=["health"])
async def healthcheck():
    return {"status": "ok", "timestamp": now_utc_naive().isoformat()}


app.include_router(api_router, prefix="/api/v1")
