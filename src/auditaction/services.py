from __future__ import annotations

from django.db import transaction

from src.auditaction.models import WalletAuditEntry


def audit_value_text(value) -> str | None:
    """Stored text form of an audited value (booleans as "true"/"false")."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@transaction.atomic
def wallet_audit_append(
    *,
    profile,
    action: str,
    old_value=None,
    new_value=None,
    changed_by=None,
    reason: str = "",
) -> WalletAuditEntry:
    """
    Append a single ledger entry. ``changed_by`` is the acting Profile, or
    None when the change is attributed to the system.
    """
    return WalletAuditEntry.objects.create(
        profile=profile,
        action=action,
        old_value=audit_value_text(old_value),
        new_value=audit_value_text(new_value),
        changed_by=changed_by if getattr(changed_by, "pk", None) else None,
        reason=reason or "",
    )
