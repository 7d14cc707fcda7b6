from django.contrib import admin
from src.auditaction.models import WalletAuditEntry


@admin.register(WalletAuditEntry)
class WalletAuditEntryAdmin(admin.ModelAdmin):
    list_display = (
        "changed_at",
        "action",
        "profile",
        "old_value",
        "new_value",
        "changed_by",
    )
    list_filter = ("action",)
    search_fields = ("profile__email", "profile__wallet_address", "old_value", "new_value")
    readonly_fields = (
        "profile",
        "action",
        "old_value",
        "new_value",
        "reason",
        "changed_by",
        "changed_at",
    )
    ordering = ("-changed_at", "-id")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
