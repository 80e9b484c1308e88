"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./pocket_ledger.db"
    auto_create_tables: bool = True

    # Service
    service_name: str = "pocket-ledger"
    log_level: str = "INFO"

    # Loans
    max_installments: int = 24

    # Read-side projections
    notification_window_days: int = 7
    report_months: int = 6
    recent_transactions_limit: int = 5


settings = Settings()
