from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"
    app_version: str = "0.1.0"

    host: str = "0.0.0.0"
    port: int = 8000

    analysis_provider: str = "document_intelligence"
    analysis_endpoint: str = ""
    analysis_key: str = ""
    analysis_model_id: str = "prebuilt-document"
    analysis_api_version: str = "2023-07-31"
    analysis_timeout_seconds: int = 30
    analysis_poll_interval_seconds: float = 1.0
    analysis_max_poll_attempts: int = 30

    storage_backend: str = "azure_blob"
    storage_account_name: str = ""
    storage_inbound_container: str = "uploads"
    storage_outbound_container: str = "downloads"
