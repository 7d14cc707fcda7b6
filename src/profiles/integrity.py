from django.db import IntegrityError

from src.core.exceptions import DomainConflictError

WALLET_UNIQUE_CONSTRAINT = "profile_wallet_unique"
EMAIL_UNIQUE_CONSTRAINT = "profile_email_unique"

# PostgreSQL reports the constraint name; SQLite only the column.
_WALLET_MARKERS = (WALLET_UNIQUE_CONSTRAINT, "profiles.wallet_address")
_EMAIL_MARKERS = (EMAIL_UNIQUE_CONSTRAINT, "profiles.email")


def wallet_taken_error(*, message: str = "This wallet address is already registered") -> DomainConflictError:
    return DomainConflictError(
        message=message,
        code="WALLET_TAKEN",
        errors={"wallet_address": ["already taken"]},
    )


def email_taken_error() -> DomainConflictError:
    return DomainConflictError(
        message="This email is already registered",
        code="EMAIL_TAKEN",
        errors={"email": ["already taken"]},
    )


def integrity_error_constraint(exc: IntegrityError) -> str:
    cause = getattr(exc, "__cause__", None)
    diag = getattr(cause, "diag", None) if cause else None
    constraint = getattr(diag, "constraint_name", "") if diag else ""
    return constraint or str(exc)


def conflict_for_integrity_error(exc: IntegrityError, *, wallet_message: str | None = None) -> DomainConflictError | None:
    """
    Map a lost uniqueness race to the same conflict the pre-checks raise.
    Returns None for any other integrity failure.
    """
    marker = integrity_error_constraint(exc)
    if any(m in marker for m in _WALLET_MARKERS):
        return wallet_taken_error(message=wallet_message) if wallet_message else wallet_taken_error()
    if any(m in marker for m in _EMAIL_MARKERS):
        return email_taken_error()
    return None
