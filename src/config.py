from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # App
    app_name: str = "Dubai Invest"
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    # Market data
    # Year used for global stats and opportunity listings when none is requested
    default_market_year: int = 2025

    # Reject suspicious statistics instead of only logging them
    strict_validation: bool = False


settings = Settings()
