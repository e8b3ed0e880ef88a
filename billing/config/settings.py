from decimal import Decimal

from pydantic import Field, AliasChoices
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Read env from container + optionally from files
    model_config = SettingsConfigDict(
        env_file=(".env", ".env.docker"),
        extra="ignore",
        case_sensitive=False,
    )

    # App
    ENVIRONMENT: str = Field(default="dev", validation_alias=AliasChoices("ENVIRONMENT", "environment"))
    APP_NAME: str = Field(default="billing_gst", validation_alias=AliasChoices("APP_NAME", "app_name"))
    LOG_LEVEL: str = Field(default="INFO", validation_alias=AliasChoices("LOG_LEVEL", "log_level"))
    DEBUG: bool = Field(default=False, validation_alias=AliasChoices("DEBUG", "debug"))
    LOG_JSON: bool = Field(default=False, validation_alias=AliasChoices("LOG_JSON", "log_json"))

    # GST engine
    GST_DEFAULT_RATE: Decimal = Field(
        default=Decimal("18"),
        ge=0,
        le=100,
        validation_alias=AliasChoices("GST_DEFAULT_RATE", "gst_default_rate"),
    )


settings = Settings()
