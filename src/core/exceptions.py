"""Domain error taxonomy and its HTTP mapping."""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse


class BusinessLogicError(Exception):
    """Base class for expected, recoverable domain failures."""

    code = "business_error"
    default_detail = "Request could not be processed"
    default_status = 422

    def __init__(self, detail: str | None = None, status_code: int | None = None):
        self.detail = detail or self.default_detail
        self.status_code = status_code or self.default_status
        super().__init__(self.detail)


class ValidationError(BusinessLogicError):
    """A required field is missing or malformed; nothing was persisted."""

    code = "validation_error"
    default_detail = "Some fields are missing or invalid, please review the form"


class InvalidTransition(BusinessLogicError):
    """The requested status change is not allowed from the current status."""

    code = "invalid_transition"
    default_detail = "This status change is not allowed, refresh the schedule and try again"
    default_status = status.HTTP_409_CONFLICT


class BayConflict(BusinessLogicError):
    """Another appointment is already being serviced in the requested bay."""

    code = "bay_conflict"
    default_detail = "This bay is already in use, choose another bay"
    default_status = status.HTTP_409_CONFLICT


class RouteCapacityExceeded(BusinessLogicError):
    code = "route_capacity_exceeded"
    default_detail = "All drivers are busy, wait until a route finishes"
    default_status = status.HTTP_409_CONFLICT


class NotFound(BusinessLogicError):
    code = "not_found"
    default_detail = "This record no longer exists"
    default_status = status.HTTP_404_NOT_FOUND


class StaleState(BusinessLogicError):
    """The tenant data changed since it was loaded (optimistic concurrency)."""

    code = "stale_state"
    default_detail = "The schedule was changed by someone else, reload and try again"
    default_status = status.HTTP_409_CONFLICT


class BookingUnavailable(BusinessLogicError):
    code = "booking_unavailable"
    default_detail = "This time can no longer be booked online"
    default_status = status.HTTP_409_CONFLICT


def register_exception_handlers(app: FastAPI) -> None:
    """Attach shared exception handlers to the FastAPI app."""

    @app.exception_handler(BusinessLogicError)
    async def _business_error_handler(_: Request, exc: BusinessLogicError):
        return JSONResponse(
            {"success": False, "error": exc.code, "message": exc.detail},
            status_code=exc.status_code,
        )
