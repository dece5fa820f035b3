import os

# Must be set before config is imported anywhere
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-identity-service")

from config import ApplicationConfig  # noqa: E402

# Cheap bcrypt keeps the suite fast; production default stays at 12
ApplicationConfig.BCRYPT_ROUNDS = 4
