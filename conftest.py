import uuid

import pytest
from django.utils import timezone

from src.users.identity_provider import IdentityProvider, IdentityProviderError


def wallet_for(n: int) -> str:
    return "0x" + f"{n:040x}"


class FakeIdentityProvider(IdentityProvider):
    """In-memory identity store; flip the flags to make calls fail."""

    def __init__(self, *, fail_create=False, fail_delete=False):
        self.identities = {}
        self.deleted = []
        self.delete_calls = 0
        self.fail_create = fail_create
        self.fail_delete = fail_delete

    def create_identity(self, *, email, credential, metadata):
        if self.fail_create:
            raise IdentityProviderError("identity store unavailable")
        identity_id = uuid.uuid4()
        self.identities[identity_id] = {"email": email, "credential": credential, "metadata": metadata}
        return identity_id

    def delete_identity(self, *, identity_id):
        self.delete_calls += 1
        if self.fail_delete:
            raise IdentityProviderError("identity store unavailable")
        self.identities.pop(identity_id, None)
        self.deleted.append(identity_id)


@pytest.fixture
def identity_provider():
    return FakeIdentityProvider()


@pytest.fixture
def identity_provider_factory():
    return FakeIdentityProvider


@pytest.fixture
def make_profile(db):
    """Profile backed by a real ``users.User`` so JWTs can be issued for it."""
    from src.profiles.models import Profile
    from src.users.models import User

    counter = {"n": 1000}

    def _make(*, role_category="lawyer", wallet_address=None, verified=True, email=None, full_name=None):
        counter["n"] += 1
        n = counter["n"]
        email = email or f"user{n}@example.com"
        user = User.objects.create_user(email=email, password="pass-1234")
        return Profile.objects.create(
            identity_id=user.id,
            email=email,
            full_name=full_name or f"User {n}",
            role_category=role_category,
            wallet_address=wallet_address if wallet_address is not None else wallet_for(n),
            is_wallet_verified=verified,
            wallet_verified_at=timezone.now() if verified else None,
        )

    return _make


@pytest.fixture
def admin_profile(make_profile):
    return make_profile(role_category="admin", email="admin@example.com", full_name="Ada Admin")


@pytest.fixture
def judge_profile(make_profile):
    return make_profile(role_category="judiciary", email="judge@example.com", full_name="Jules Judge")


@pytest.fixture
def lawyer_profile(make_profile):
    return make_profile(role_category="lawyer", email="lawyer@example.com", full_name="Lea Lawyer")
