from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Token metadata fallbacks, used only until the ledger reports decimals
    DEFAULT_DECIMALS_A: int = 18
    DEFAULT_DECIMALS_B: int = 6
    # LP token decimals are fixed by the pool contract
    LP_DECIMALS: int = 18

    # Deposit ratio policy
    RATIO_TOLERANCE: float = 0.01  # 1% relative error
    FIRST_DEPOSIT_RATIO: float = 1.0  # proposed, never enforced

    # Seconds to wait after a confirmed write before re-reading the ledger
    REFRESH_DELAY_SECONDS: float = 2.0

    # App
    APP_NAME: str = "Liquidity Panel"
    DEBUG: bool = False  # Safe default for production; set DEBUG=True in .env for local dev


settings = Settings()
