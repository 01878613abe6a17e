from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration settings.
    """
    model_config = SettingsConfigDict(env_prefix="EXECUTION_LOGGER_", env_file=".env", extra="ignore")

    # Diagnostics
    log_level: str = "INFO"

    # Execution log layout defaults
    enable_logger_name: bool = True
    tabulation_prefix: str = "\t"
    timestamp_format: str = "%Y-%m-%d %H:%M:%S"


settings = Settings()
