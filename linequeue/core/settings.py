from anystore.settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="lq_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
    )

    debug: bool = False
    """Log every mutating request with its lines"""
    log_level: str = "INFO"

    host: str = "127.0.0.1"
    """Interface for `lq serve`"""
