import logging
from functools import lru_cache

import environ
import hvac

log = logging.getLogger(__name__)

env = environ.Env()

BASE_DIR = environ.Path(__file__) - 2
APPS_DIR = BASE_DIR.path("src")

# OpenBao is optional: without OPENBAO_ADDR every setting comes from the environment.
OPENBAO_ADDR = env("OPENBAO_ADDR", default="")
# Auth options: OPENBAO_TOKEN for dev; AppRole (role + secret ids) in prod
OPENBAO_TOKEN = env("OPENBAO_TOKEN", default="")
OPENBAO_ROLE_ID = env("OPENBAO_ROLE_ID", default="")
OPENBAO_SECRET_ID = env("OPENBAO_SECRET_ID", default="")
OPENBAO_KV_MOUNT = env("OPENBAO_KV_MOUNT", default="secret")
OPENBAO_KV_PATH = env("OPENBAO_KV_PATH", default="wallet-identity")


def _bao_client() -> hvac.Client:
    client = hvac.Client(url=OPENBAO_ADDR, timeout=5)
    if OPENBAO_TOKEN:
        client.token = OPENBAO_TOKEN
    elif OPENBAO_ROLE_ID and OPENBAO_SECRET_ID:
        resp = client.auth.approle.login(role_id=OPENBAO_ROLE_ID, secret_id=OPENBAO_SECRET_ID)
        client.token = resp["auth"]["client_token"]
    return client


@lru_cache(maxsize=8)
def bao_read_kv(path=None) -> dict:
    """KV v2 secrets at {OPENBAO_KV_MOUNT}/{path or OPENBAO_KV_PATH}, cached per process."""
    resp = _bao_client().secrets.kv.v2.read_secret_version(
        mount_point=OPENBAO_KV_MOUNT,
        path=path or OPENBAO_KV_PATH,
        raise_on_deleted_version=True,
    )
    return resp["data"]["data"] or {}


def env_get(name: str, default=None, *, kv_path=None):
    """
    Environment (.env via django-environ) first, then OpenBao KV v2 when
    configured, then the default.
    """
    val = env(name, default=None)
    if val is not None:
        return val
    if not OPENBAO_ADDR:
        return default
    try:
        data = bao_read_kv(kv_path)
    except Exception as e:
        log.warning("env_get: OpenBao lookup failed for %s: %s (using default)", name, e)
        return default
    return data.get(name, default)


def env_get_bool(name: str, default: bool = False) -> bool:
    val = env_get(name, default=None)
    if val is None:
        return default
    if isinstance(val, bool):
        return val
    return str(val).strip().lower() in {"1", "true", "yes", "on"}


def django_settings_module(environ_vars) -> str:
    """Settings module picked by DJANGO_ENV (production, test, anything else = development)."""
    return {
        "production": "config.django.production",
        "test": "config.django.test",
    }.get(environ_vars.get("DJANGO_ENV", "development"), "config.django.base")
