import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .config import settings
from .errors import (
    ConfigurationError,
    DuplicateError,
    HolidayLookupError,
    HolidaySourceError,
    NotFoundError,
)
from .routers import blocked_dates, booking_times, holidays, reservations

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Gassigeher Booking Times API")

app.include_router(booking_times.router)
app.include_router(blocked_dates.router)
app.include_router(holidays.router)
app.include_router(reservations.router)


def _error(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.exception_handler(HolidayLookupError)
async def holiday_lookup_error_handler(request: Request, exc: HolidayLookupError):
    logger.error(f"{request.method} {request.url.path}: {exc}")
    return _error(status.HTTP_503_SERVICE_UNAVAILABLE, exc)


@app.exception_handler(HolidaySourceError)
async def holiday_source_error_handler(request: Request, exc: HolidaySourceError):
    logger.error(f"{request.method} {request.url.path}: {exc}")
    return _error(status.HTTP_502_BAD_GATEWAY, exc)


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    return _error(status.HTTP_422_UNPROCESSABLE_CONTENT, exc)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return _error(status.HTTP_404_NOT_FOUND, exc)


@app.exception_handler(DuplicateError)
async def duplicate_handler(request: Request, exc: DuplicateError):
    return _error(status.HTTP_409_CONFLICT, exc)


@app.get("/health")
def health():
    return {"status": "ok"}
