from __future__ import annotations

from django.db.models import QuerySet

from src.auditaction.models import WalletAuditEntry
from src.common.utils import validate_uuid
from src.core.policies import ensure_wallet_admin


def wallet_audit_queryset(*, profile_id) -> QuerySet[WalletAuditEntry]:
    profile_uuid = validate_uuid(profile_id)
    if profile_uuid is None:
        return WalletAuditEntry.objects.none()
    return (
        WalletAuditEntry.objects.select_related("changed_by")
        .filter(profile_id=profile_uuid)
        .order_by("-changed_at", "-id")
    )


def wallet_audit_history(*, actor, profile_id) -> list[WalletAuditEntry]:
    """Ledger of one profile, newest first. Admin and judiciary only."""
    ensure_wallet_admin(actor)
    return list(wallet_audit_queryset(profile_id=profile_id))
