import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("profiles", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="WalletAuditEntry",
            fields=[
                ("id", models.BigAutoField(primary_key=True, serialize=False)),
                (
                    "action",
                    models.CharField(
                        choices=[
                            ("wallet_added", "Wallet ajouté"),
                            ("wallet_changed", "Wallet modifié"),
                            ("wallet_verified", "Wallet vérifié"),
                            ("wallet_unverified", "Wallet dévérifié"),
                            ("role_assigned", "Rôle attribué"),
                        ],
                        db_index=True,
                        max_length=32,
                    ),
                ),
                ("old_value", models.TextField(blank=True, null=True)),
                ("new_value", models.TextField(blank=True, null=True)),
                ("reason", models.TextField(blank=True, default="")),
                (
                    "changed_at",
                    models.DateTimeField(db_index=True, default=django.utils.timezone.now, editable=False),
                ),
                (
                    "changed_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="wallet_audit_changes",
                        to="profiles.profile",
                    ),
                ),
                (
                    "profile",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="wallet_audit_entries",
                        to="profiles.profile",
                    ),
                ),
            ],
            options={
                "db_table": "wallet_audit_log",
                "ordering": ["-changed_at", "-id"],
                "indexes": [
                    models.Index(fields=["profile", "-changed_at"], name="wallet_audit_profile_idx"),
                ],
            },
        ),
    ]
