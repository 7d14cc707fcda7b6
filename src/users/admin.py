from django.contrib import admin
from src.users.models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    ordering = ("-created_at",)
    list_display = ("email", "is_active", "is_staff", "is_superuser", "email_confirmed_at", "created_at")
    search_fields = ("email",)
    readonly_fields = ("created_at", "updated_at", "last_login", "email_confirmed_at", "metadata")
    exclude = ("password",)
