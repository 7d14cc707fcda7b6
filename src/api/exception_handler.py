import traceback

import structlog
from django.conf import settings
from ninja_extra import NinjaExtraAPI
from ninja.errors import ValidationError as NinjaValidationError
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError

from src.core.apis import request_id_for
from src.core.exceptions import APIError, CompensationFailureError, DependencyFailureError
from src.profiles.integrity import conflict_for_integrity_error

logger = structlog.get_logger(__name__)


def attach_exception_handlers(api: NinjaExtraAPI) -> None:
    def _envelope(request, *, message: str, status: int, code: str, data=None, errors=None, extra=None,):
        return api.create_response(
            request,
            {
                "success": 200 <= status < 400,
                "message": message,
                "data": data or {},
                "extra": extra or {},
                "errors": errors,
                "code": code,
                "request_id": request_id_for(request),
            },
            status=status,
        )

    @api.exception_handler(APIError)
    def on_api_error(request, exc: APIError):
        if isinstance(exc, (DependencyFailureError, CompensationFailureError)):
            logger.error("api_dependency_error", code=exc.code, message=exc.message, path=request.path)
        return _envelope(
            request,
            message=exc.message,
            status=exc.status,
            code=exc.code,
            errors=exc.errors,
            extra=exc.extra,
        )

    @api.exception_handler(IntegrityError)
    def on_integrity_error(request, exc: IntegrityError):
        conflict = conflict_for_integrity_error(exc)
        if conflict is not None:
            return on_api_error(request, conflict)
        logger.warning("api_integrity_error", path=request.path, error=str(exc))
        return _envelope(request, message="Conflict", status=409, code="CONFLICT")

    @api.exception_handler(DjangoValidationError)
    def on_django_validation_error(request, exc: DjangoValidationError):
        errors = exc.message_dict if hasattr(exc, "message_dict") else exc.messages
        return _envelope(
            request,
            message="Validation error",
            status=422,
            code="VALIDATION_ERROR",
            errors=errors,
        )

    @api.exception_handler(NinjaValidationError)
    def on_ninja_validation_error(request, exc: NinjaValidationError):
        return _envelope(
            request,
            message="Validation error",
            status=422,
            code="VALIDATION_ERROR",
            errors=exc.errors,
        )

    @api.exception_handler(Exception)
    def on_unexpected_error(request, exc: Exception):
        logger.exception("api_unexpected_error", path=request.path)
        err = None
        extra = {}
        if settings.DEBUG:
            err = str(exc)
            extra["trace"] = traceback.format_exc(limit=20)
        return _envelope(
            request,
            message="Unexpected error",
            status=500,
            code="INTERNAL_ERROR",
            errors=err,
            extra=extra if settings.DEBUG else None,
        )
