import uuid

from ninja_extra import api_controller, route
from ninja_jwt.authentication import JWTAuth

from src.auditaction import selectors
from src.auditaction.presenters import wallet_audit_entry_to_dto
from src.core.apis import BaseAPIController
from src.core.policies import actor_from_request


@api_controller("/audit", tags=["Audit"], auth=JWTAuth())
class AuditActionController(BaseAPIController):
    @route.get("/profiles/{profile_id}/wallet")
    def wallet_history(self, profile_id: uuid.UUID):
        """Wallet ledger of a profile, newest first. Admin and judiciary only."""
        actor = actor_from_request(self.context.request)
        entries = selectors.wallet_audit_history(actor=actor, profile_id=profile_id)
        return self.create_response(
            message="Wallet audit history",
            data={"items": [wallet_audit_entry_to_dto(e) for e in entries]},
            status_code=200,
        )
