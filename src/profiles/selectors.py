import uuid
from dataclasses import dataclass

import structlog
from django.db.models import Q, QuerySet

from src.common.utils import validate_uuid
from src.core.exceptions import DomainNotFoundError
from src.profiles.models import Profile
from src.profiles.wallets import wallet_try_normalize

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class WalletAuthorization:
    authorized: bool
    profile_id: uuid.UUID | None = None
    full_name: str | None = None
    role_category: str | None = None
    reason: str | None = None


def _profile_not_found() -> DomainNotFoundError:
    return DomainNotFoundError(message="Profile not found", code="PROFILE_NOT_FOUND")


def profile_list(
    *,
    search: str | None = None,
    role_category: str | None = None,
    verified: bool | None = None,
) -> QuerySet[Profile]:
    """All profiles, newest created first."""
    qs = Profile.objects.all()

    if role_category:
        qs = qs.filter(role_category=role_category)

    if verified is not None:
        qs = qs.filter(is_wallet_verified=verified)

    if search:
        s = search.strip()
        qs = qs.filter(
            Q(email__icontains=s)
            | Q(full_name__icontains=s)
            | Q(wallet_address__icontains=s)
        )

    return qs.order_by("-created_at")


def profile_get_by_id(*, profile_id) -> Profile:
    profile_uuid = validate_uuid(profile_id)
    if profile_uuid is None:
        raise _profile_not_found()
    try:
        return Profile.objects.get(id=profile_uuid)
    except Profile.DoesNotExist:
        raise _profile_not_found()


def profile_get_for_update(*, profile_id) -> Profile:
    """Get profile with select_for_update lock; call inside a transaction."""
    profile_uuid = validate_uuid(profile_id)
    if profile_uuid is None:
        raise _profile_not_found()
    try:
        return Profile.objects.select_for_update().get(id=profile_uuid)
    except Profile.DoesNotExist:
        raise _profile_not_found()


def profile_get_by_wallet(*, wallet_address: str) -> Profile | None:
    """Malformed addresses are simply not found."""
    wallet = wallet_try_normalize(wallet_address)
    if wallet is None:
        return None
    return Profile.objects.filter(wallet_address=wallet).first()


def profile_get_for_identity(*, identity_id) -> Profile | None:
    return Profile.objects.filter(identity_id=identity_id).first()


def profile_wallet_taken(*, wallet_address: str, exclude_profile_id=None) -> bool:
    qs = Profile.objects.filter(wallet_address=wallet_address)
    if exclude_profile_id is not None:
        qs = qs.exclude(id=exclude_profile_id)
    return qs.exists()


def profile_email_taken(*, email: str) -> bool:
    return Profile.objects.filter(email__iexact=email.strip()).exists()


def wallet_authorization_check(
    *,
    wallet_address: str,
    role_category: str,
    signature: str | None = None,
    message: str | None = None,
) -> WalletAuthorization:
    """
    Login-time check: is this wallet allowed to authenticate for this role?

    Never raises for unknown or malformed wallets. Identity fields are only
    returned when a profile holds the exact wallet supplied. ``signature``
    and ``message`` are accepted but not verified.
    """
    wallet = wallet_try_normalize(wallet_address)
    if wallet is None:
        result = WalletAuthorization(authorized=False, reason="WALLET_INVALID")
        logger.info("wallet_authorization_checked", role_category=role_category, authorized=False, reason=result.reason)
        return result

    profile = (
        Profile.objects.filter(wallet_address=wallet)
        .only("id", "full_name", "role_category", "wallet_address", "is_wallet_verified")
        .first()
    )
    if profile is None:
        result = WalletAuthorization(authorized=False, reason="WALLET_NOT_FOUND")
        logger.info(
            "wallet_authorization_checked",
            wallet_address=wallet,
            role_category=role_category,
            authorized=False,
            reason=result.reason,
        )
        return result

    # the stored wallet equals ``wallet`` by construction of the lookup
    reason = None
    if profile.role_category != role_category:
        reason = "ROLE_MISMATCH"
    elif not profile.is_wallet_verified:
        reason = "WALLET_UNVERIFIED"

    result = WalletAuthorization(
        authorized=reason is None,
        profile_id=profile.id,
        full_name=profile.full_name,
        role_category=profile.role_category,
        reason=reason,
    )
    logger.info(
        "wallet_authorization_checked",
        wallet_address=wallet,
        role_category=role_category,
        profile_id=str(profile.id),
        authorized=result.authorized,
        reason=reason,
        signature_supplied=bool(signature),
    )
    return result
