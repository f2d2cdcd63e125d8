from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    GOOGLE_MAPS_API_KEY: Optional[str] = None
    DISTANCE_MATRIX_URL: str = "https://maps.googleapis.com/maps/api/distancematrix/json"
    DISTANCE_TIMEOUT: int = 10

    TARIFF_FILE: str = "./data/tariff.json"
    TAX_RATE: float = 0.19
    TIMEZONE: str = "America/Santiago"

    SECRET_KEY: str = "change-me"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480  # 8 hours

    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD_HASH: Optional[str] = None

    EMAIL_API_URL: str = "https://api.resend.com/emails"
    EMAIL_API_KEY: Optional[str] = None
    EMAIL_FROM: str = "Quotes <quotes@example.com>"
    EMAIL_BCC: Optional[str] = None
    EMAIL_TIMEOUT: int = 10
    EMAIL_RETRIES: int = 3

    STATIC_DIR: str = "./static"
    CORS_ORIGINS: str = "*"

    API_TITLE: str = "Delivery Quote Service"
    API_DESCRIPTION: str = "Quotes delivery fees between two addresses"
    API_VERSION: str = "1.0.0"

    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
