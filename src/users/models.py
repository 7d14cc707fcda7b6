from django.db import models

from src.common.models import BaseModel


from django.contrib.auth.models import (
    AbstractBaseUser,
    PermissionsMixin,
    BaseUserManager,
)


class UserManager(BaseUserManager):
    use_in_migrations = True

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError("Email is required")

        email = self.normalize_email(email).lower()
        user = self.model(email=email, **extra_fields)

        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)

        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.update(
            {
                "is_staff": True,
                "is_superuser": True,
                "is_active": True,
            }
        )
        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, BaseModel, PermissionsMixin):
    """
    Identité authentifiable (login, JWT).
    Le rôle et le wallet vivent sur profiles.Profile, relié par identity_id.
    """

    email = models.EmailField(unique=True, db_index=True)
    metadata = models.JSONField(
        default=dict,
        blank=True,
        help_text="Identity metadata captured at creation (full name, role, wallet).",
    )
    email_confirmed_at = models.DateTimeField(null=True, blank=True)

    # Django required
    is_staff = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    class Meta:
        db_table = "users"
        verbose_name = "User"
        verbose_name_plural = "Users"

    def __str__(self):
        return f"{self.email} [SUPER_ADMIN]" if self.is_superuser else self.email
