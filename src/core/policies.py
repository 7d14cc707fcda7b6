from src.core.exceptions import AuthenticationRequiredError, AuthorizationDeniedError
from src.profiles.models import WALLET_ADMIN_ROLES


def ensure_authenticated(actor) -> None:
    if actor is None:
        raise AuthenticationRequiredError()


def ensure_role_in(actor, *roles, message: str = "Permission denied") -> None:
    ensure_authenticated(actor)
    if getattr(actor, "role_category", None) not in roles:
        raise AuthorizationDeniedError(message=message)


def ensure_wallet_admin(actor) -> None:
    """Only admin and judiciary profiles may manage wallets or read the ledger."""
    ensure_role_in(
        actor,
        *WALLET_ADMIN_ROLES,
        message="Unauthorized: only admins can manage wallet bindings",
    )


def actor_from_request(request):
    """
    Resolve the calling Profile from the JWT-authenticated identity.

    An identity that has no profile holds no role at all, so it is refused
    here rather than treated as anonymous.
    """
    from src.profiles.selectors import profile_get_for_identity

    identity = getattr(request, "auth", None)
    if identity is None:
        raise AuthenticationRequiredError()
    actor = profile_get_for_identity(identity_id=identity.pk)
    if actor is None:
        raise AuthorizationDeniedError(message="No profile is bound to this identity")
    return actor
