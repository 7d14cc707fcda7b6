from django.apps import AppConfig


class ProfilesConfig(AppConfig):
    name = "src.profiles"
    label = "profiles"
    verbose_name = "Wallet profiles"
