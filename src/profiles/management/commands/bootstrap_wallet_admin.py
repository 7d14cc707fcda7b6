import os
from getpass import getpass

from django.core.management.base import BaseCommand, CommandError

from src.core.exceptions import APIError
from src.profiles.services import profile_bootstrap_admin


class Command(BaseCommand):
    help = "Create the first administrator profile with a verified wallet."

    def add_arguments(self, parser):
        parser.add_argument("--email", dest="email", help="Administrator email")
        parser.add_argument("--full-name", dest="full_name", default="Platform Admin")
        parser.add_argument("--wallet", dest="wallet", help="Administrator wallet address (0x + 40 hex)")
        parser.add_argument("--password", dest="password", help="Administrator password")
        parser.add_argument("--phone", dest="phone", default="")

    def handle(self, *args, **options):
        email = options.get("email") or os.getenv("ADMIN_USER_EMAIL")
        wallet = options.get("wallet") or os.getenv("ADMIN_USER_WALLET")
        password = options.get("password") or os.getenv("ADMIN_USER_PASSWORD")
        full_name = options.get("full_name") or os.getenv("ADMIN_USER_FULL_NAME", "Platform Admin")

        if not email:
            raise CommandError("Provide --email or set ADMIN_USER_EMAIL.")
        if not wallet:
            raise CommandError("Provide --wallet or set ADMIN_USER_WALLET.")

        # Optional interactive password prompt if not provided via args/env
        if not password:
            self.stdout.write(self.style.WARNING("No password provided."))
            password = getpass("Enter administrator password: ").strip()
            if not password:
                raise CommandError("Password is required.")

        try:
            profile = profile_bootstrap_admin(
                email=email,
                full_name=full_name,
                wallet_address=wallet,
                password=password,
                phone=options.get("phone") or "",
            )
        except APIError as exc:
            raise CommandError(f"{exc.code}: {exc.message}") from exc

        self.stdout.write(
            self.style.SUCCESS(f"Created administrator {profile.email} bound to {profile.wallet_address}")
        )
