from config.env import env

# Dotted path of the IdentityProvider used by registration.
WALLET_IDENTITY_PROVIDER = env(
    "WALLET_IDENTITY_PROVIDER",
    default="src.users.identity_provider.DjangoIdentityProvider",
)

# Deletion attempts before an orphaned identity is escalated.
WALLET_IDENTITY_COMPENSATION_ATTEMPTS = env.int("WALLET_IDENTITY_COMPENSATION_ATTEMPTS", default=3)

WALLET_AUTHORIZE_THROTTLE_RATE = env("WALLET_AUTHORIZE_THROTTLE_RATE", default="30/min")
