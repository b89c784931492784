from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # DynamoDB
    AWS_REGION: str = ""
    AWS_ACCESS_KEY_ID: str = ""
    AWS_SECRET_ACCESS_KEY: str = ""
    DYNAMODB_TABLE_NAME: str = ""
    SETTINGS_TABLE_NAME: str = "blog_settings"
    DYNAMODB_ENDPOINT_URL: str = ""

    # Site
    SITE_URL: str = "http://localhost:3000"
    PUBLIC_CACHE_CONTROL: str = "public, s-maxage=60, stale-while-revalidate=300"
    POSTS_CACHE_TTL_SECONDS: int = 3600

    # Logging
    LOG_LEVEL: str = "INFO"

    # Admin access
    INKWELL_API_KEY: str = ""
    ADMIN_USERNAME: str = "admin"

    @property
    def missing_store_settings(self) -> List[str]:
        required = {
            "AWS_REGION": self.AWS_REGION,
            "AWS_ACCESS_KEY_ID": self.AWS_ACCESS_KEY_ID,
            "AWS_SECRET_ACCESS_KEY": self.AWS_SECRET_ACCESS_KEY,
            "DYNAMODB_TABLE_NAME": self.DYNAMODB_TABLE_NAME,
        }
        return [name for name, value in required.items() if not value]


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
