import uuid
from datetime import timedelta

import pytest
from django.utils import timezone
from structlog.testing import capture_logs

from src.core.exceptions import DomainNotFoundError
from src.profiles import selectors
from src.profiles.models import Profile

pytestmark = pytest.mark.django_db

WALLET = "0xabcdef0123456789abcdef0123456789abcdef01"
MIXED = "0xAbCdEf0123456789aBcDeF0123456789AbCdEf01"


@pytest.fixture
def lawyer(make_profile):
    return make_profile(role_category="lawyer", wallet_address=WALLET, full_name="Lea Lawyer")


def test_authorize_verified_wallet_with_matching_role(lawyer):
    result = selectors.wallet_authorization_check(wallet_address=WALLET, role_category="lawyer")

    assert result.authorized is True
    assert result.profile_id == lawyer.id
    assert result.full_name == "Lea Lawyer"
    assert result.role_category == "lawyer"
    assert result.reason is None


def test_authorize_is_case_insensitive_on_input(lawyer):
    result = selectors.wallet_authorization_check(wallet_address=MIXED, role_category="lawyer")
    assert result.authorized is True


def test_authorize_role_mismatch_still_returns_identity(lawyer):
    result = selectors.wallet_authorization_check(wallet_address=WALLET, role_category="judiciary")

    assert result.authorized is False
    assert result.reason == "ROLE_MISMATCH"
    assert result.profile_id == lawyer.id
    assert result.role_category == "lawyer"


def test_authorize_unverified_wallet_is_denied(make_profile):
    profile = make_profile(role_category="lawyer", wallet_address=WALLET, verified=False)

    result = selectors.wallet_authorization_check(wallet_address=WALLET, role_category="lawyer")

    assert result.authorized is False
    assert result.reason == "WALLET_UNVERIFIED"
    assert result.profile_id == profile.id


def test_authorize_unknown_wallet_returns_no_identity(lawyer):
    result = selectors.wallet_authorization_check(
        wallet_address="0x" + "9" * 40,
        role_category="lawyer",
    )

    assert result.authorized is False
    assert result.reason == "WALLET_NOT_FOUND"
    assert result.profile_id is None
    assert result.full_name is None
    assert result.role_category is None


@pytest.mark.parametrize("wallet_address", ["", "0x12", "hello", "0x" + "g" * 40])
def test_authorize_malformed_wallet_never_raises(wallet_address):
    result = selectors.wallet_authorization_check(wallet_address=wallet_address, role_category="lawyer")

    assert result.authorized is False
    assert result.reason == "WALLET_INVALID"
    assert result.profile_id is None


def test_authorize_ignores_signature(lawyer):
    result = selectors.wallet_authorization_check(
        wallet_address=WALLET,
        role_category="lawyer",
        signature="0xdeadbeef",
        message="login nonce 42",
    )
    assert result.authorized is True


def test_authorize_is_logged(lawyer):
    with capture_logs() as logs:
        selectors.wallet_authorization_check(wallet_address=WALLET, role_category="clerk")

    [event] = [e for e in logs if e["event"] == "wallet_authorization_checked"]
    assert event["wallet_address"] == WALLET
    assert event["role_category"] == "clerk"
    assert event["authorized"] is False
    assert event["reason"] == "ROLE_MISMATCH"


def test_profile_list_newest_first_and_filters(make_profile):
    first = make_profile(role_category="lawyer", full_name="Alpha Avocat")
    second = make_profile(role_category="clerk", verified=False)
    third = make_profile(role_category="lawyer")
    base = timezone.now()
    for offset, profile in enumerate([first, second, third]):
        Profile.objects.filter(pk=profile.pk).update(created_at=base + timedelta(seconds=offset))

    assert list(selectors.profile_list()) == [third, second, first]
    assert list(selectors.profile_list(role_category="lawyer")) == [third, first]
    assert list(selectors.profile_list(verified=False)) == [second]
    assert list(selectors.profile_list(search="alpha")) == [first]
    assert list(selectors.profile_list(search=second.wallet_address[-6:])) == [second]


def test_profile_get_by_wallet(lawyer):
    assert selectors.profile_get_by_wallet(wallet_address=MIXED) == lawyer
    assert selectors.profile_get_by_wallet(wallet_address="0x" + "0" * 40) is None
    assert selectors.profile_get_by_wallet(wallet_address="garbage") is None


def test_profile_get_by_id(lawyer):
    assert selectors.profile_get_by_id(profile_id=str(lawyer.id)) == lawyer
    with pytest.raises(DomainNotFoundError):
        selectors.profile_get_by_id(profile_id=uuid.uuid4())
    with pytest.raises(DomainNotFoundError):
        selectors.profile_get_by_id(profile_id="nope")


def test_profile_get_for_identity(lawyer):
    assert selectors.profile_get_for_identity(identity_id=lawyer.identity_id) == lawyer
    assert selectors.profile_get_for_identity(identity_id=uuid.uuid4()) is None


def test_taken_checks(lawyer):
    assert selectors.profile_wallet_taken(wallet_address=WALLET)
    assert not selectors.profile_wallet_taken(wallet_address=WALLET, exclude_profile_id=lawyer.id)
    assert selectors.profile_email_taken(email=f" {lawyer.email.upper()} ")
    assert not selectors.profile_email_taken(email="nobody@example.com")
