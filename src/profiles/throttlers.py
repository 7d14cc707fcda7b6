from django.conf import settings
from ninja_extra.throttling import AnonRateThrottle


class WalletAuthorizeThrottle(AnonRateThrottle):
    """
    Rate limit anonymous wallet authorization checks per IP.
    The endpoint is hit on every login attempt; this keeps wallet probing slow.
    """
    rate = getattr(settings, "WALLET_AUTHORIZE_THROTTLE_RATE", "30/min")
    scope = "wallet_authorize"
