import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ConfigurationError(ValueError):
    pass


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./identity.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    CREATE_SCHEMA_ON_STARTUP = bool(data.get("CREATE_SCHEMA_ON_STARTUP", True))
    # Secrets may stay out of env.yaml
    JWT_SECRET = data.get("JWT_SECRET", os.environ.get("JWT_SECRET"))
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    JWT_ISSUER = data.get("JWT_ISSUER", "identity-service")
    ACCESS_TOKEN_TTL_MINUTES = int(data.get("ACCESS_TOKEN_TTL_MINUTES", 15))
    REFRESH_TOKEN_TTL_DAYS = int(data.get("REFRESH_TOKEN_TTL_DAYS", 7))
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))
    COOKIE_SECURE = bool(data.get("COOKIE_SECURE", True))
    ACTIVATION_REQUIRES_AUTH = bool(data.get("ACTIVATION_REQUIRES_AUTH", False))
    OPERATION_ROLES = data.get("OPERATION_ROLES", {"activate": ["admin", "super-admin"]})

    @classmethod
    def validate(cls):
        """Fail fast at boot on settings the service cannot run without"""
        if not cls.JWT_SECRET:
            raise ConfigurationError("JWT_SECRET is not set")
        if cls.ACCESS_TOKEN_TTL_MINUTES * 60 >= cls.REFRESH_TOKEN_TTL_DAYS * 86400:
            raise ConfigurationError(
                "ACCESS_TOKEN_TTL_MINUTES must be shorter than REFRESH_TOKEN_TTL_DAYS"
            )
