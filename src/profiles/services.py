import uuid

import structlog
from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email
from django.db import DatabaseError, IntegrityError, transaction
from django.utils import timezone

from src.auditaction.models import WalletAuditAction
from src.auditaction.services import wallet_audit_append
from src.core.exceptions import (
    CompensationFailureError,
    DependencyFailureError,
    DomainValidationError,
)
from src.core.policies import ensure_wallet_admin
from src.profiles import selectors
from src.profiles.integrity import (
    conflict_for_integrity_error,
    email_taken_error,
    wallet_taken_error,
)
from src.profiles.models import Profile, RoleCategory
from src.profiles.wallets import wallet_normalize
from src.users.identity_provider import (
    IdentityProvider,
    IdentityProviderError,
    get_identity_provider,
    identity_temporary_credential,
)

logger = structlog.get_logger(__name__)

DEFAULT_WALLET_UPDATE_REASON = "Admin updated"
WALLET_IN_USE_MESSAGE = "New wallet address is already in use"


########################################################################################################################################
# Helpers
# ######################################################################################################################################
# **************************************************************************************************************************************
#
def _ensure_fits(field_name: str, value: str) -> None:
    max_length = Profile._meta.get_field(field_name).max_length
    if max_length and len(value) > max_length:
        raise DomainValidationError(
            message=f"{field_name} must be at most {max_length} characters",
            errors={field_name: [f"max length {max_length}"]},
        )


def _clean_registration_fields(*, email, full_name, role_category, phone) -> tuple[str, str, str, str]:
    email = (email or "").strip().lower()
    try:
        validate_email(email)
    except DjangoValidationError:
        raise DomainValidationError(
            message="Invalid email format",
            errors={"email": ["invalid format"]},
        )

    full_name = (full_name or "").strip()
    if not full_name:
        raise DomainValidationError(
            message="Full name is required",
            errors={"full_name": ["required"]},
        )

    role_category = (role_category or "").strip().lower()
    if role_category not in RoleCategory.values:
        raise DomainValidationError(
            message=f"role_category must be one of {sorted(RoleCategory.values)}",
            errors={"role_category": ["invalid choice"]},
        )

    phone = (phone or "").strip()

    for field_name, value in (("email", email), ("full_name", full_name), ("phone", phone)):
        _ensure_fits(field_name, value)

    return email, full_name, role_category, phone


def _persist_failed(exc: DatabaseError, *, what: str) -> DependencyFailureError:
    return DependencyFailureError(
        message=f"Failed to {what}: {exc.__class__.__name__}",
        code="PERSIST_FAILED",
    )


def _identity_compensate(*, provider: IdentityProvider, identity_id: uuid.UUID, email: str, cause: str) -> None:
    """
    Delete an identity whose profile could not be stored. Retried; when every
    attempt fails the orphan is logged for manual cleanup and escalated.
    """
    attempts = max(1, getattr(settings, "WALLET_IDENTITY_COMPENSATION_ATTEMPTS", 3))
    last_error = None
    for attempt in range(1, attempts + 1):
        try:
            provider.delete_identity(identity_id=identity_id)
        except IdentityProviderError as exc:
            last_error = exc
            logger.warning(
                "identity_compensation_retry",
                identity_id=str(identity_id),
                email=email,
                attempt=attempt,
                error=exc.message,
            )
            continue
        logger.info("identity_compensated", identity_id=str(identity_id), email=email, cause=cause)
        return

    logger.critical(
        "identity_compensation_failed",
        identity_id=str(identity_id),
        email=email,
        attempts=attempts,
        cause=cause,
        error=last_error.message if last_error else None,
    )
    raise CompensationFailureError(
        message=(
            "Registration failed and the created identity could not be removed; "
            f"manual cleanup required ({cause})"
        ),
        extra={"identity_id": str(identity_id), "email": email},
    )


def _profile_register(
    *,
    email: str,
    full_name: str,
    wallet: str,
    role_category: str,
    phone: str,
    changed_by: Profile | None,
    credential: str,
    identity_provider: IdentityProvider | None,
) -> Profile:
    if selectors.profile_wallet_taken(wallet_address=wallet):
        raise wallet_taken_error()
    if selectors.profile_email_taken(email=email):
        raise email_taken_error()

    provider = identity_provider or get_identity_provider()
    try:
        identity_id = provider.create_identity(
            email=email,
            credential=credential,
            metadata={
                "full_name": full_name,
                "role_category": role_category,
                "wallet_address": wallet,
            },
        )
    except IdentityProviderError as exc:
        logger.error("identity_creation_failed", email=email, error=exc.message)
        raise DependencyFailureError(
            message=f"Failed to create identity: {exc.message}",
            code="IDENTITY_CREATION_FAILED",
        ) from exc

    try:
        with transaction.atomic():
            profile = Profile.objects.create(
                identity_id=identity_id,
                email=email,
                full_name=full_name,
                role_category=role_category,
                phone=phone,
                wallet_address=wallet,
                is_wallet_verified=True,
                wallet_verified_at=timezone.now(),
            )
            wallet_audit_append(
                profile=profile,
                action=WalletAuditAction.WALLET_ADDED,
                new_value=wallet,
                changed_by=changed_by,
            )
    except IntegrityError as exc:
        conflict = conflict_for_integrity_error(exc)
        logger.error("profile_insert_failed", email=email, identity_id=str(identity_id), error=str(exc))
        _identity_compensate(provider=provider, identity_id=identity_id, email=email, cause=str(exc))
        raise (conflict or _persist_failed(exc, what="create profile")) from exc
    except DatabaseError as exc:
        logger.error("profile_insert_failed", email=email, identity_id=str(identity_id), error=str(exc))
        _identity_compensate(provider=provider, identity_id=identity_id, email=email, cause=str(exc))
        raise _persist_failed(exc, what="create profile") from exc

    logger.info(
        "profile_registered",
        profile_id=str(profile.id),
        identity_id=str(identity_id),
        role_category=role_category,
        wallet_address=wallet,
        changed_by=str(changed_by.id) if changed_by else None,
    )
    return profile
# **************************************************************************************************************************************
# ######################################################################################################################################


def profile_register_with_wallet(
    *,
    actor: Profile | None,
    email: str,
    full_name: str,
    wallet_address: str,
    role_category: str,
    phone: str | None = None,
    identity_provider: IdentityProvider | None = None,
) -> Profile:
    """
    Admin registration: creates the identity, then the wallet-verified
    profile. Nothing persists on failure; if the profile insert fails the
    identity is deleted again.
    """
    ensure_wallet_admin(actor)

    wallet = wallet_normalize(wallet_address)
    email, full_name, role_category, phone = _clean_registration_fields(
        email=email, full_name=full_name, role_category=role_category, phone=phone
    )

    return _profile_register(
        email=email,
        full_name=full_name,
        wallet=wallet,
        role_category=role_category,
        phone=phone,
        changed_by=actor,
        credential=identity_temporary_credential(),
        identity_provider=identity_provider,
    )


def profile_bootstrap_admin(
    *,
    email: str,
    full_name: str,
    wallet_address: str,
    password: str,
    phone: str | None = None,
    identity_provider: IdentityProvider | None = None,
) -> Profile:
    """First administrator; no caller exists yet so the ledger records the system."""
    wallet = wallet_normalize(wallet_address)
    email, full_name, role_category, phone = _clean_registration_fields(
        email=email, full_name=full_name, role_category=RoleCategory.ADMIN, phone=phone
    )
    return _profile_register(
        email=email,
        full_name=full_name,
        wallet=wallet,
        role_category=role_category,
        phone=phone,
        changed_by=None,
        credential=password,
        identity_provider=identity_provider,
    )


def profile_update_wallet(
    *,
    actor: Profile | None,
    profile_id,
    new_wallet_address: str,
    reason: str | None = None,
) -> Profile:
    """
    Rebind a profile's wallet. A rebind is a fresh attestation, so the
    wallet ends up verified. Re-sending an already applied rebind is a no-op.
    """
    ensure_wallet_admin(actor)

    wallet = wallet_normalize(new_wallet_address)
    reason = (reason or "").strip() or DEFAULT_WALLET_UPDATE_REASON

    try:
        with transaction.atomic():
            profile = selectors.profile_get_for_update(profile_id=profile_id)

            if selectors.profile_wallet_taken(wallet_address=wallet, exclude_profile_id=profile.id):
                raise wallet_taken_error(message=WALLET_IN_USE_MESSAGE)

            previous_wallet = profile.wallet_address
            was_verified = profile.is_wallet_verified

            if previous_wallet == wallet and was_verified:
                logger.info("wallet_update_noop", profile_id=str(profile.id), wallet_address=wallet)
                return profile

            profile.wallet_address = wallet
            profile.is_wallet_verified = True
            profile.wallet_verified_at = timezone.now()
            profile.save(update_fields=["wallet_address", "is_wallet_verified", "wallet_verified_at", "updated_at"])

            if previous_wallet != wallet:
                wallet_audit_append(
                    profile=profile,
                    action=WalletAuditAction.WALLET_CHANGED,
                    old_value=previous_wallet,
                    new_value=wallet,
                    changed_by=actor,
                    reason=reason,
                )
            if not was_verified:
                wallet_audit_append(
                    profile=profile,
                    action=WalletAuditAction.WALLET_VERIFIED,
                    old_value=False,
                    new_value=True,
                    changed_by=actor,
                    reason=reason,
                )
    except IntegrityError as exc:
        conflict = conflict_for_integrity_error(exc, wallet_message=WALLET_IN_USE_MESSAGE)
        if conflict:
            raise conflict from exc
        logger.error("wallet_update_failed", profile_id=str(profile_id), error=str(exc))
        raise _persist_failed(exc, what="update wallet") from exc
    except DatabaseError as exc:
        logger.error("wallet_update_failed", profile_id=str(profile_id), error=str(exc))
        raise _persist_failed(exc, what="update wallet") from exc

    logger.info(
        "wallet_updated",
        profile_id=str(profile.id),
        old_wallet_address=previous_wallet,
        new_wallet_address=wallet,
        reason=reason,
        changed_by=str(actor.id),
    )
    return profile


def profile_set_wallet_verified(*, actor: Profile | None, profile_id, verified: bool) -> Profile:
    """
    verified <-> unverified. Setting the current value again changes nothing
    and leaves no ledger entry. Unverifying revokes login authorization at once.
    """
    ensure_wallet_admin(actor)

    try:
        with transaction.atomic():
            profile = selectors.profile_get_for_update(profile_id=profile_id)
            previous = profile.is_wallet_verified

            if previous == verified:
                logger.info("wallet_verification_noop", profile_id=str(profile.id), verified=verified)
                return profile

            profile.is_wallet_verified = verified
            profile.wallet_verified_at = timezone.now() if verified else None
            profile.save(update_fields=["is_wallet_verified", "wallet_verified_at", "updated_at"])

            wallet_audit_append(
                profile=profile,
                action=WalletAuditAction.WALLET_VERIFIED if verified else WalletAuditAction.WALLET_UNVERIFIED,
                old_value=previous,
                new_value=verified,
                changed_by=actor,
            )
    except DatabaseError as exc:
        logger.error("wallet_verification_failed", profile_id=str(profile_id), error=str(exc))
        raise _persist_failed(exc, what="update wallet verification") from exc

    if verified:
        logger.info("wallet_verified", profile_id=str(profile.id), changed_by=str(actor.id))
    else:
        logger.warning(
            "wallet_unverified",
            profile_id=str(profile.id),
            wallet_address=profile.wallet_address,
            changed_by=str(actor.id),
            effect="login authorization revoked",
        )
    return profile
