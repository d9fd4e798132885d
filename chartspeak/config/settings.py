from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class GeminiConfig(BaseSettings):
    """Google Gemini configuration."""

    api_key: SecretStr | None = Field(
        default=None,
        validation_alias="GEMINI_API_KEY",
    )
    model: str = Field(
        default="gemini-flash-latest",
        validation_alias="GEMINI_MODEL",
    )

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        secrets_dir=".secrets",
        case_sensitive=False,
        extra="ignore",
    )


class PollyConfig(BaseSettings):
    """Amazon Polly configuration."""

    region: str = "us-east-1"
    default_voice_id: str = "Joanna"
    access_key: Optional[str] = None
    secret_key: Optional[str] = None

    model_config = SettingsConfigDict(
        env_prefix="POLLY_",
        env_file=(".env", ".env.local"),
        case_sensitive=False,
        extra="ignore",
    )


class SonificationConfig(BaseSettings):
    """Tone rendering and autoplay timing."""

    autoplay_interval_seconds: float = Field(default=0.8, gt=0)
    tone_duration_seconds: float = Field(default=0.3, gt=0, le=5.0)
    sample_rate: int = Field(default=44100, ge=8000, le=96000)
    default_volume: int = Field(default=80, ge=0, le=100)

    model_config = SettingsConfigDict(
        env_prefix="SONIFICATION_",
        env_file=(".env", ".env.local"),
        case_sensitive=False,
        extra="ignore",
    )


class UploadConfig(BaseSettings):
    """Limits applied to chart uploads."""

    max_bytes: int = Field(default=10 * 1024 * 1024, ge=1)

    model_config = SettingsConfigDict(
        env_prefix="UPLOAD_",
        env_file=(".env", ".env.local"),
        case_sensitive=False,
        extra="ignore",
    )


class Settings(BaseSettings):
    """Application settings"""

    app_name: str = "ChartSpeak"
    app_version: str = "1.0.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000
    log_file: str = "logs/app.log"
    analysis_log_file: str = "logs/chart_analysis.log"

    # Gemini
    gemini: GeminiConfig = Field(default_factory=GeminiConfig)

    # Polly
    polly: PollyConfig = Field(default_factory=PollyConfig)

    # Sonification
    sonification: SonificationConfig = Field(default_factory=SonificationConfig)

    # Uploads
    upload: UploadConfig = Field(default_factory=UploadConfig)

    # CORS
    cors_origins: list[str] = ["*"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
settings = Settings()
