# ruff: noqa: I001
import logging
import os
import time
import traceback

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from translation_api.errors import (
    InvalidDriver,
    IOFailure,
    LanguageExists,
    MalformedStoredData,
    TranslationError,
)
from translation_api.logging_config import configure_logging
from translation_api.routers.languages import router as languages_router
from translation_api.routers.translations import router as translations_router

configure_logging(
    service_name=os.getenv("LOG_SERVICE_NAME", "translation"),
)

app = FastAPI(title="Translation Manager API")
logger = logging.getLogger(__name__)

_ERROR_STATUS = (
    (LanguageExists, status.HTTP_409_CONFLICT),
    (InvalidDriver, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (MalformedStoredData, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (IOFailure, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


class ErrorLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        start = time.perf_counter()
        try:
            response = await call_next(request)
            if 500 <= response.status_code < 600:
                duration_ms = int((time.perf_counter() - start) * 1000)
                logger.error(
                    "HTTP 5xx response",
                    extra={
                        "method": request.method,
                        "path": request.url.path,
                        "status_code": response.status_code,
                        "duration_ms": duration_ms,
                    },
                )
            return response
        except Exception as exc:  # noqa: BLE001 - log every unhandled exception, then re-raise
            duration_ms = int((time.perf_counter() - start) * 1000)
            logger.error(
                "Unhandled exception during request",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "duration_ms": duration_ms,
                    "exception_type": type(exc).__name__,
                    "exception_message": str(exc),
                    "traceback": traceback.format_exc(),
                },
            )
            raise


app.add_middleware(ErrorLoggingMiddleware)


@app.exception_handler(TranslationError)
async def translation_error_handler(request: Request, exc: TranslationError) -> JSONResponse:
    status_code = status.HTTP_400_BAD_REQUEST
    for error_type, mapped in _ERROR_STATUS:
        if isinstance(exc, error_type):
            status_code = mapped
            break
    log = logger.error if status_code >= 500 else logger.warning
    log(
        "Translation error",
        extra={"path": request.url.path, "error_type": type(exc).__name__, "detail": str(exc)},
    )
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.get("/health")
def healthcheck() -> dict:
    return {"status": "ok"}


app.include_router(languages_router)
app.include_router(translations_router)
