import pytest

from src.core.exceptions import DomainValidationError
from src.profiles.wallets import wallet_is_valid, wallet_normalize, wallet_try_normalize

MIXED = "0xAbCdEf0123456789aBcDeF0123456789AbCdEf01"
CANONICAL = "0xabcdef0123456789abcdef0123456789abcdef01"


def test_normalize_lowercases_mixed_case():
    assert wallet_normalize(MIXED) == CANONICAL


def test_normalize_accepts_uppercase_prefix():
    assert wallet_normalize("0X" + MIXED[2:]) == CANONICAL


def test_normalize_is_idempotent():
    once = wallet_normalize(MIXED)
    assert wallet_normalize(once) == once


@pytest.mark.parametrize(
    "value",
    [
        "",
        "0x",
        CANONICAL[:-1],
        CANONICAL + "0",
        "abcdef0123456789abcdef0123456789abcdef0123",
        "0xzzcdef0123456789abcdef0123456789abcdef01",
        f" {CANONICAL}",
        f"{CANONICAL}\n",
        None,
        12345,
    ],
)
def test_normalize_rejects_malformed(value):
    with pytest.raises(DomainValidationError) as exc_info:
        wallet_normalize(value)
    assert exc_info.value.code == "WALLET_ADDRESS_INVALID"
    assert exc_info.value.status == 422


def test_try_normalize_never_raises():
    assert wallet_try_normalize(MIXED) == CANONICAL
    assert wallet_try_normalize("not-a-wallet") is None
    assert wallet_try_normalize(None) is None


def test_is_valid():
    assert wallet_is_valid(CANONICAL)
    assert not wallet_is_valid(CANONICAL.replace("0x", "1x"))
