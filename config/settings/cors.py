from config.env import env

CORS_URLS_REGEX = r"^/api/.*$"
CORS_ALLOW_CREDENTIALS = True

CORS_ALLOWED_ORIGINS = [
    origin.strip().lower()
    for origin in env.str("CORS_ALLOWED_ORIGINS", default="").split(",")
    if origin.strip()
]
