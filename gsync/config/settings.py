from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Command-line options take precedence; these values fill in whatever the
    operator leaves out, and are the only source of configuration for the
    HTTP API.
    """

    # Rules file and repository
    GSYNC_CONFIG_PATH: str = "gsync.json"
    GSYNC_SOURCE: str = "."

    # Remote host
    GSYNC_DESTINATION: str = ""
    GSYNC_SSH_PORT: int = 22
    GSYNC_SSH_TIMEOUT: int = 20  # seconds

    # HTTP API
    GSYNC_API_HOST: str = "127.0.0.1"
    GSYNC_API_PORT: int = 8005

    # Logging: "console" or "json"
    GSYNC_LOG_FORMAT: str = "console"

    # Development and debugging
    DEBUG: bool = False


@lru_cache
def get_settings() -> Settings:
    return Settings()
