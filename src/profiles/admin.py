from django.contrib import admin
from src.profiles.models import Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = (
        "email",
        "full_name",
        "role_category",
        "wallet_address",
        "is_wallet_verified",
        "wallet_verified_at",
        "created_at",
    )
    list_filter = ("role_category", "is_wallet_verified")
    search_fields = ("email", "full_name", "wallet_address")
    # Wallet binding and verification only change through the services so
    # that every change lands in the audit ledger.
    readonly_fields = (
        "identity_id",
        "role_category",
        "wallet_address",
        "is_wallet_verified",
        "wallet_verified_at",
        "created_at",
        "updated_at",
    )
    ordering = ("-created_at",)

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
