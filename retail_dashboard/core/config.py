from pydantic_settings import BaseSettings
from pydantic import Field
from typing import List, Optional
import os


class Config(BaseSettings):
    # Database Configuration
    database_url: str = Field(
        default="sqlite+aiosqlite:///./dashboard.db", alias="DB_URL"
    )

    # JWT Configuration
    secret_key: str = Field(default="", alias="JWT_SECRET")
    algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 12, alias="ACCESS_TOKEN_EXPIRE_MINUTES"
    )

    # IANA zone name used for "today"; server local time when unset
    dashboard_timezone: Optional[str] = Field(default=None, alias="DASHBOARD_TIMEZONE")

    # Server binding for the retail-dashboard command
    host: str = Field(default="127.0.0.1", alias="HOST")
    port: int = Field(default=8000, alias="PORT")

    cors_origins: List[str] = Field(
        default=["http://localhost", "http://localhost:5173"],
        alias="CORS_ORIGINS",
    )

    is_production: bool = (
        os.getenv("ENVIRONMENT", "development").lower() == "production"
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        populate_by_name = True


# Instantiate the settings
config = Config()
