from django.db import models
from django.db.models import CheckConstraint, Q, UniqueConstraint

from src.common.models import BaseModel
from src.profiles.wallets import WALLET_ADDRESS_PATTERN


class RoleCategory(models.TextChoices):
    JUDICIARY = "judiciary", "Judiciary"
    LAWYER = "lawyer", "Lawyer"
    CLERK = "clerk", "Clerk"
    POLICE = "police", "Police"
    PUBLIC_PARTY = "public_party", "Public party"
    ADMIN = "admin", "Admin"


WALLET_ADMIN_ROLES = (RoleCategory.ADMIN, RoleCategory.JUDICIARY)


class Profile(BaseModel):
    """Identité d'un utilisateur et liaison de son wallet"""

    # Identité externe (fournisseur d'identité authentifiable)
    identity_id = models.UUIDField(unique=True, editable=False)

    email = models.EmailField()
    full_name = models.CharField(max_length=255)
    phone = models.CharField(max_length=50, blank=True, default="")
    role_category = models.CharField(max_length=20, choices=RoleCategory.choices)

    # Wallet
    wallet_address = models.CharField(max_length=42, null=True, blank=True)
    is_wallet_verified = models.BooleanField(default=False)
    wallet_verified_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "profiles"
        ordering = ["-created_at"]
        constraints = [
            UniqueConstraint(fields=["email"], name="profile_email_unique"),
            UniqueConstraint(fields=["wallet_address"], name="profile_wallet_unique"),
            CheckConstraint(
                condition=Q(wallet_address__isnull=True)
                | Q(wallet_address__regex=WALLET_ADDRESS_PATTERN),
                name="profile_wallet_canonical",
            ),
            CheckConstraint(
                condition=Q(is_wallet_verified=True, wallet_verified_at__isnull=False)
                | Q(is_wallet_verified=False, wallet_verified_at__isnull=True),
                name="profile_wallet_verified_at_consistent",
            ),
        ]
        indexes = [
            models.Index(fields=["is_wallet_verified"], name="profile_wallet_verified_idx"),
            models.Index(fields=["role_category"], name="profile_role_category_idx"),
        ]

    def __str__(self):
        wallet = self.wallet_address or "no wallet"
        return f"{self.email} [{self.role_category}] {wallet}"
