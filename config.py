# config.py
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    dev_mode: bool = False

    app_slug: str = "channel-profitability"
    log_level: str = "INFO"

    # Limites de validação dos parâmetros de canal (%)
    max_commission_percent: float = 50.0
    max_fixed_cost_percent: float = 20.0
    max_marketing_cost_percent: float = 30.0

    target_price_max_iterations: int = 100

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )


settings = Settings()
