def _iso(value):
    return value.isoformat() if value else None


def profile_to_list_dto(p) -> dict:
    return {
        "id": str(p.id),
        "email": p.email,
        "full_name": p.full_name,
        "role_category": p.role_category,
        "wallet_address": p.wallet_address,
        "is_wallet_verified": p.is_wallet_verified,
        "wallet_verified_at": _iso(p.wallet_verified_at),
    }


def profile_to_detail_dto(p) -> dict:
    return {
        **profile_to_list_dto(p),
        "phone": p.phone or None,
        "identity_id": str(p.identity_id),
        "created_at": _iso(getattr(p, "created_at", None)),
        "updated_at": _iso(getattr(p, "updated_at", None)),
    }


def wallet_authorization_to_dto(result) -> dict:
    """Identity fields are only present when a profile holds the wallet."""
    data = {"authorized": result.authorized}
    if result.profile_id is not None:
        data.update(
            {
                "profile_id": str(result.profile_id),
                "full_name": result.full_name,
                "role_category": result.role_category,
            }
        )
    return data
