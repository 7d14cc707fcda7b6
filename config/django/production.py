from .base import *  # noqa

env.read_env(BASE_DIR(".env.backend"))

DEBUG = env_get_bool("DEBUG", default=False)

SECRET_KEY = env_get("DJANGO_SECRET_KEY")

ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=[])

CORS_ALLOW_ALL_ORIGINS = False

CACHES = {
    "default": env.cache("CACHE_URL", default="locmemcache://"),
}

SESSION_COOKIE_SECURE = env_get_bool("SESSION_COOKIE_SECURE", default=True)
CSRF_COOKIE_SECURE = env_get_bool("CSRF_COOKIE_SECURE", default=True)
CSRF_TRUSTED_ORIGINS = env.list("CSRF_TRUSTED_ORIGINS", default=[])
USE_X_FORWARDED_HOST = True
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
SECURE_SSL_REDIRECT = env_get_bool("SECURE_SSL_REDIRECT", default=True)
SECURE_HSTS_SECONDS = 31536000
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_HSTS_PRELOAD = True

SECURE_CONTENT_TYPE_NOSNIFF = env_get_bool("SECURE_CONTENT_TYPE_NOSNIFF", default=True)
