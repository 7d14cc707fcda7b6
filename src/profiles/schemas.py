from ninja import Schema
from pydantic import field_validator

from src.profiles.models import RoleCategory


def _validate_role(v: str) -> str:
    role = (v or "").strip().lower()
    if role not in RoleCategory.values:
        raise ValueError(f"role_category must be one of {sorted(RoleCategory.values)}")
    return role


class ProfileRegisterPayload(Schema):
    email: str
    full_name: str
    wallet_address: str
    role_category: str
    phone: str | None = None

    @field_validator("email")
    @classmethod
    def _validate_email(cls, v: str) -> str:
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Invalid email format")
        return v.strip().lower()

    @field_validator("full_name")
    @classmethod
    def _full_name_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("full_name is required")
        return v.strip()

    @field_validator("wallet_address")
    @classmethod
    def _strip_wallet(cls, v: str) -> str:
        # Format is checked by the service so every caller gets the same error code.
        return v.strip()

    @field_validator("role_category")
    @classmethod
    def _validate_role_category(cls, v: str) -> str:
        return _validate_role(v)

    @field_validator("phone")
    @classmethod
    def _normalize_phone_optional(cls, v: str | None) -> str | None:
        return v.strip() if isinstance(v, str) else v


class WalletUpdatePayload(Schema):
    new_wallet_address: str
    reason: str | None = None

    @field_validator("new_wallet_address")
    @classmethod
    def _strip_wallet(cls, v: str) -> str:
        return v.strip()


class WalletVerificationPayload(Schema):
    verified: bool


class WalletAuthorizePayload(Schema):
    """Login-path request. Never rejected here: bad input is an unauthorized result."""

    wallet_address: str | None = None
    role_category: str | None = None
    signature: str | None = None
    message: str | None = None

    @field_validator("wallet_address", "role_category")
    @classmethod
    def _strip(cls, v: str | None) -> str:
        return (v or "").strip()


class ProfileFilterParams(Schema):
    """Paramètres de filtrage et recherche"""

    search: str | None = None
    role_category: str | None = None
    verified: bool | None = None

    @field_validator("role_category")
    @classmethod
    def _validate_role_optional(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return _validate_role(v)
