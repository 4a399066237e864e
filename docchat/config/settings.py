from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "docchat"
    db_username: str = "docchat"
    db_password: str = "secret"
    db_pool_max_size: int = Field(default=10, gt=0)

    pdf_engine: str = "pdfplumber"

    max_upload_bytes: int = Field(default=20 * 1024 * 1024, gt=0)
    max_context_chars: int = Field(default=100_000, gt=0)
    scan_min_chars_per_page: int = Field(default=100, ge=0)
    raster_max_pages: int = Field(default=15, gt=0)
    raster_scale: float = Field(default=1.5, gt=0)

    completion_provider: str = "openai"
    completion_api_key: str = ""
    completion_model_name: str = "gpt-4o"
    completion_base_url: str = ""
    completion_timeout_seconds: int = Field(default=60, gt=0)
    completion_temperature: float = 0.7

    default_chat_title: str = "New chat"
    title_max_chars: int = Field(default=50, gt=0)
