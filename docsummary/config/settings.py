from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "docsummary"
    db_username: str = "docsummary"
    db_password: str = "secret"

    max_job_attempts: int = Field(default=3, ge=1)
    job_poll_interval_seconds: int = 5

    files_root: str = "/app/files"
    max_upload_size_bytes: int = Field(default=10 * 1024 * 1024, gt=0)
    delete_uploaded_files: bool = False

    pdf_engine: str = "pdfplumber"

    ocr_language: str = "eng"
    ocr_tesseract_cmd: str = ""

    summarization_provider: str = "gemini"
    summarization_api_key: str = ""
    summarization_base_url: str = ""
    summarization_models: str = (
        "gemini-2.0-flash,gemini-2.0-flash-lite,gemini-1.5-flash,"
        "gemini-1.5-flash-8b,gemini-1.5-pro"
    )
    summarization_temperature: float = 0.3
    summarization_max_output_tokens: int = 8192
    summarization_max_retries: int = Field(default=3, ge=1)
    summarization_retry_delay_seconds: float = 2.0
    summarization_model_switch_cooldown_seconds: float = 1.5
    summarization_health_probe_timeout_seconds: float = 3.0

    @property
    def summarization_model_names(self) -> list[str]:
        """Configured model names in priority order, blanks removed."""
        return [name.strip() for name in self.summarization_models.split(",") if name.strip()]
