import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Profile",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("identity_id", models.UUIDField(editable=False, unique=True)),
                ("email", models.EmailField(max_length=254)),
                ("full_name", models.CharField(max_length=255)),
                ("phone", models.CharField(blank=True, default="", max_length=50)),
                (
                    "role_category",
                    models.CharField(
                        choices=[
                            ("judiciary", "Judiciary"),
                            ("lawyer", "Lawyer"),
                            ("clerk", "Clerk"),
                            ("police", "Police"),
                            ("public_party", "Public party"),
                            ("admin", "Admin"),
                        ],
                        max_length=20,
                    ),
                ),
                ("wallet_address", models.CharField(blank=True, max_length=42, null=True)),
                ("is_wallet_verified", models.BooleanField(default=False)),
                ("wallet_verified_at", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "db_table": "profiles",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["is_wallet_verified"], name="profile_wallet_verified_idx"),
                    models.Index(fields=["role_category"], name="profile_role_category_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("email",), name="profile_email_unique"),
                    models.UniqueConstraint(fields=("wallet_address",), name="profile_wallet_unique"),
                    models.CheckConstraint(
                        condition=models.Q(("wallet_address__isnull", True))
                        | models.Q(("wallet_address__regex", "^0x[0-9a-f]{40}$")),
                        name="profile_wallet_canonical",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("is_wallet_verified", True), ("wallet_verified_at__isnull", False))
                        | models.Q(("is_wallet_verified", False), ("wallet_verified_at__isnull", True)),
                        name="profile_wallet_verified_at_consistent",
                    ),
                ],
            },
        ),
    ]
