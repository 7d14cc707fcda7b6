from __future__ import annotations
from typing import Any


class APIError(Exception):
    def __init__(self, *, message: str, code: str, status: int, errors: Any = None, extra: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status
        self.errors = errors
        self.extra = extra or {}


class AuthenticationRequiredError(APIError):
    """Aucun appelant authentifié"""

    def __init__(self, *, message: str = "Not authenticated", code: str = "AUTHENTICATION_REQUIRED", extra: dict[str, Any] | None = None):
        super().__init__(message=message, code=code, status=401, extra=extra)


class AuthorizationDeniedError(APIError):
    """L'appelant n'a pas le rôle requis"""

    def __init__(self, *, message: str = "Permission denied", code: str = "FORBIDDEN", extra: dict[str, Any] | None = None):
        super().__init__(message=message, code=code, status=403, extra=extra)


class DomainValidationError(APIError):
    def __init__(self, *, message: str, code: str = "VALIDATION_ERROR", errors: Any = None, extra: dict[str, Any] | None = None):
        super().__init__(message=message, code=code, status=422, errors=errors, extra=extra)


class DomainConflictError(APIError):
    def __init__(self, *, message: str, code: str, errors: Any = None, extra: dict[str, Any] | None = None):
        super().__init__(message=message, code=code, status=409, errors=errors, extra=extra)


class DomainNotFoundError(APIError):
    def __init__(self, *, message: str, code: str = "NOT_FOUND", extra: dict[str, Any] | None = None):
        super().__init__(message=message, code=code, status=404, extra=extra)


class DependencyFailureError(APIError):
    """Le fournisseur d'identité ou le stockage a échoué"""

    def __init__(self, *, message: str, code: str, extra: dict[str, Any] | None = None):
        super().__init__(message=message, code=code, status=502, extra=extra)


class CompensationFailureError(APIError):
    """
    An identity was created but the profile insert failed and the identity
    could not be deleted afterwards. The orphan must be cleaned up by hand.
    """

    def __init__(self, *, message: str, code: str = "IDENTITY_COMPENSATION_FAILED", extra: dict[str, Any] | None = None):
        super().__init__(message=message, code=code, status=500, extra=extra)
