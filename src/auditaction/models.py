from django.db import models
from django.utils import timezone


class WalletAuditAction(models.TextChoices):
    WALLET_ADDED = "wallet_added", "Wallet ajouté"
    WALLET_CHANGED = "wallet_changed", "Wallet modifié"
    WALLET_VERIFIED = "wallet_verified", "Wallet vérifié"
    WALLET_UNVERIFIED = "wallet_unverified", "Wallet dévérifié"
    ROLE_ASSIGNED = "role_assigned", "Rôle attribué"


class AppendOnlyError(Exception):
    pass


class WalletAuditEntry(models.Model):
    """
    Journal append-only des changements de wallet d'un profil.
    Les entrées ne disparaissent qu'avec leur profil (cascade).
    """

    # Integer key so that entries sharing a timestamp keep insertion order.
    id = models.BigAutoField(primary_key=True)

    profile = models.ForeignKey(
        "profiles.Profile",
        on_delete=models.CASCADE,
        related_name="wallet_audit_entries",
    )
    action = models.CharField(max_length=32, choices=WalletAuditAction.choices, db_index=True)

    old_value = models.TextField(null=True, blank=True)
    new_value = models.TextField(null=True, blank=True)
    reason = models.TextField(blank=True, default="")

    # Null = system actor
    changed_by = models.ForeignKey(
        "profiles.Profile",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="wallet_audit_changes",
    )
    changed_at = models.DateTimeField(default=timezone.now, editable=False, db_index=True)

    class Meta:
        db_table = "wallet_audit_log"
        ordering = ["-changed_at", "-id"]
        indexes = [
            models.Index(fields=["profile", "-changed_at"], name="wallet_audit_profile_idx"),
        ]

    def __str__(self) -> str:
        actor = self.changed_by.email if self.changed_by else "system"
        return f"{self.action} on {self.profile_id} by {actor} at {self.changed_at:%Y-%m-%d %H:%M:%S}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise AppendOnlyError("Wallet audit entries are append-only. Updates are not allowed.")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise AppendOnlyError("Wallet audit entries are append-only. Deletions are not allowed.")
