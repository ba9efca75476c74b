import os
from dotenv import load_dotenv

load_dotenv()

class Settings:
    APP_NAME: str = os.getenv("APP_NAME", "Hotel Reservation API")
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    # Bearer tokens issued by the identity provider
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret-key-change-me")
    ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))

    # Inventory
    SEED_ROOMS: bool = os.getenv("SEED_ROOMS", "true").lower() == "true"

    # Pagination defaults
    DEFAULT_PAGE_LIMIT: int = int(os.getenv("DEFAULT_PAGE_LIMIT", "10"))

settings = Settings()
