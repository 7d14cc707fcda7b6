def wallet_audit_entry_to_dto(entry) -> dict:
    changed_by = entry.changed_by
    return {
        "id": entry.id,
        "profile_id": str(entry.profile_id),
        "action": entry.action,
        "old_value": entry.old_value,
        "new_value": entry.new_value,
        "reason": entry.reason or None,
        "changed_by": {
            "id": str(changed_by.id),
            "full_name": changed_by.full_name,
        } if changed_by else None,
        "changed_at": entry.changed_at.isoformat() if entry.changed_at else None,
    }
