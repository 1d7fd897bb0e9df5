"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LEDGER_",
        extra="ignore",
    )

    # Service
    service_name: str = "household-ledger"
    log_level: str = "INFO"

    # Money formatting
    currency_symbol: str = "$"

    # Forecasting
    forecast_tolerance: float = 0.10  # Fraction of expected total, e.g. 0.10 = 10%
    max_projection_steps: int = 366  # Upper bound on projected due dates per expense


settings = Settings()
