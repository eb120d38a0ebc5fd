import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./test.db")
    # Mount point for every router, e.g. "/api"
    API_PREFIX = data.get("API_PREFIX", "")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    AUTO_CREATE_TABLES = bool(data.get("AUTO_CREATE_TABLES", True))

    # Token signing
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_REFRESH_SECRET = data.get(
        "JWT_REFRESH_SECRET", "dev-refresh-secret-key-change-in-production"
    )
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRES_MINUTES = int(data.get("ACCESS_TOKEN_EXPIRES_MINUTES", 15))
    REFRESH_TOKEN_EXPIRES_DAYS = int(data.get("REFRESH_TOKEN_EXPIRES_DAYS", 7))

    # Password hashing
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))

    # Session and lockout policy
    MAX_SESSIONS = int(data.get("MAX_SESSIONS", 5))
    MAX_FAILED_ATTEMPTS = int(data.get("MAX_FAILED_ATTEMPTS", 5))
    LOCKOUT_DURATION_MINUTES = int(data.get("LOCKOUT_DURATION_MINUTES", 15))
    MAX_ATTEMPTS_PER_IP = int(data.get("MAX_ATTEMPTS_PER_IP", 50))
    LOGIN_ATTEMPT_RETENTION_DAYS = int(data.get("LOGIN_ATTEMPT_RETENTION_DAYS", 30))

    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")
