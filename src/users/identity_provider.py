from __future__ import annotations

import secrets
import uuid
from typing import Any

from django.conf import settings
from django.db import DatabaseError, transaction
from django.utils import timezone
from django.utils.module_loading import import_string

from src.users.models import User


class IdentityProviderError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class IdentityProvider:
    """
    Authenticatable-identity store. Registration creates an identity here
    first, then the profile; ``delete_identity`` is only used to undo a
    creation whose profile could not be stored.
    """

    def create_identity(self, *, email: str, credential: str, metadata: dict[str, Any]) -> uuid.UUID:
        raise NotImplementedError

    def delete_identity(self, *, identity_id: uuid.UUID) -> None:
        raise NotImplementedError


class DjangoIdentityProvider(IdentityProvider):
    """Identities stored as ``users.User`` rows, each call committed on its own."""

    def create_identity(self, *, email: str, credential: str, metadata: dict[str, Any]) -> uuid.UUID:
        try:
            with transaction.atomic():
                if User.objects.filter(email__iexact=email).exists():
                    raise IdentityProviderError(f"An identity already exists for {email}")
                user = User.objects.create_user(
                    email=email,
                    password=credential,
                    metadata=metadata,
                    email_confirmed_at=timezone.now(),
                )
        except DatabaseError as exc:
            raise IdentityProviderError(str(exc)) from exc
        return user.id

    def delete_identity(self, *, identity_id: uuid.UUID) -> None:
        try:
            with transaction.atomic():
                User.objects.filter(id=identity_id).delete()
        except DatabaseError as exc:
            raise IdentityProviderError(str(exc)) from exc


def identity_temporary_credential() -> str:
    return f"tmp_{secrets.token_urlsafe(24)}"


def get_identity_provider() -> IdentityProvider:
    provider_path = getattr(
        settings,
        "WALLET_IDENTITY_PROVIDER",
        "src.users.identity_provider.DjangoIdentityProvider",
    )
    return import_string(provider_path)()
