import re

from src.core.exceptions import DomainValidationError

# Canonical stored form; the check constraint on profiles uses the same pattern.
WALLET_ADDRESS_PATTERN = r"^0x[0-9a-f]{40}$"

_WALLET_INPUT_RE = re.compile(r"0x[0-9a-f]{40}", re.IGNORECASE)


def wallet_is_valid(value) -> bool:
    return isinstance(value, str) and _WALLET_INPUT_RE.fullmatch(value) is not None


def wallet_normalize(value) -> str:
    """
    Canonicalize a wallet address to ``0x`` + 40 lowercase hex digits.

    Input is case-insensitive. Anything else (including surrounding
    whitespace) is rejected before it can reach storage.
    """
    if not wallet_is_valid(value):
        raise DomainValidationError(
            message="Invalid wallet address: expected 0x followed by 40 hexadecimal characters",
            code="WALLET_ADDRESS_INVALID",
            errors={"wallet_address": ["invalid format"]},
        )
    return value.lower()


def wallet_try_normalize(value) -> str | None:
    if not wallet_is_valid(value):
        return None
    return value.lower()
