import uuid

from ninja import Body, Query
from ninja_extra import api_controller, route
from ninja_jwt.authentication import JWTAuth

from src.api.pagination import Paginator
from src.core.apis import BaseAPIController
from src.core.policies import actor_from_request, ensure_wallet_admin
from src.profiles import selectors, services
from src.profiles.presenters import (
    profile_to_detail_dto,
    profile_to_list_dto,
    wallet_authorization_to_dto,
)
from src.profiles.schemas import (
    ProfileFilterParams,
    ProfileRegisterPayload,
    WalletAuthorizePayload,
    WalletUpdatePayload,
    WalletVerificationPayload,
)
from src.profiles.throttlers import WalletAuthorizeThrottle


@api_controller("/profiles", tags=["Profiles"], auth=JWTAuth())
class ProfileController(BaseAPIController):
    @route.post("/")
    def register_profile(self, body: ProfileRegisterPayload = Body(...)):
        actor = actor_from_request(self.context.request)
        profile = services.profile_register_with_wallet(
            actor=actor,
            email=body.email,
            full_name=body.full_name,
            wallet_address=body.wallet_address,
            role_category=body.role_category,
            phone=body.phone,
        )
        return self.create_response(
            message="Profile registered with a verified wallet",
            data=profile_to_detail_dto(profile),
            status_code=201,
        )

    @route.get("/")
    def list_profiles(self, filters: Query[ProfileFilterParams]):
        ensure_wallet_admin(actor_from_request(self.context.request))

        qs = selectors.profile_list(
            search=filters.search,
            role_category=filters.role_category,
            verified=filters.verified,
        )

        paginator = Paginator(default_page_size=20, max_page_size=100)
        items, meta = paginator.paginate_queryset(qs, self.context.request)

        return self.create_response(
            message="Profiles fetched",
            data={"items": [profile_to_list_dto(p) for p in items], "pagination": meta},
            status_code=200,
        )

    @route.get("/by-wallet/{wallet_address}")
    def find_by_wallet(self, wallet_address: str):
        ensure_wallet_admin(actor_from_request(self.context.request))

        profile = selectors.profile_get_by_wallet(wallet_address=wallet_address.strip())
        if profile is None:
            return self.create_response(
                message="No profile holds this wallet address",
                status_code=404,
                code="PROFILE_NOT_FOUND",
            )
        return self.create_response(data=profile_to_detail_dto(profile), status_code=200)

    @route.get("/{profile_id}")
    def get_profile(self, profile_id: uuid.UUID):
        ensure_wallet_admin(actor_from_request(self.context.request))
        profile = selectors.profile_get_by_id(profile_id=profile_id)
        return self.create_response(data=profile_to_detail_dto(profile), status_code=200)

    @route.patch("/{profile_id}/wallet")
    def update_wallet(self, profile_id: uuid.UUID, body: WalletUpdatePayload = Body(...)):
        actor = actor_from_request(self.context.request)
        profile = services.profile_update_wallet(
            actor=actor,
            profile_id=profile_id,
            new_wallet_address=body.new_wallet_address,
            reason=body.reason,
        )
        return self.create_response(
            message="Wallet updated successfully",
            data=profile_to_detail_dto(profile),
            status_code=200,
        )

    @route.post("/{profile_id}/verification")
    def set_verification(self, profile_id: uuid.UUID, body: WalletVerificationPayload = Body(...)):
        """
        verified=false is destructive: the wallet can no longer be used to
        log in until it is verified again.
        """
        actor = actor_from_request(self.context.request)
        profile = services.profile_set_wallet_verified(
            actor=actor,
            profile_id=profile_id,
            verified=body.verified,
        )
        extra = None
        if not profile.is_wallet_verified:
            extra = {"warning": "Login authorization for this wallet is revoked"}
        verb = "verified" if profile.is_wallet_verified else "unverified"
        return self.create_response(
            message=f"Wallet {verb} successfully",
            data=profile_to_detail_dto(profile),
            extra=extra,
            status_code=200,
        )


@api_controller("/wallet-auth", tags=["Wallet authorization"], auth=None, throttle=[WalletAuthorizeThrottle()])
class WalletAuthController(BaseAPIController):
    @route.post("/authorize")
    def authorize(self, body: WalletAuthorizePayload = Body(...)):
        """Called on every wallet login attempt, including anonymous ones."""
        result = selectors.wallet_authorization_check(
            wallet_address=body.wallet_address,
            role_category=body.role_category,
            signature=body.signature,
            message=body.message,
        )
        message = "Wallet authorized" if result.authorized else "Wallet not found or not authorized for this role"
        return self.create_response(
            message=message,
            data=wallet_authorization_to_dto(result),
            code=result.reason,
            status_code=200,
        )
