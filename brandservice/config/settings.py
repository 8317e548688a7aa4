"""
Configuration settings
"""
from pydantic_settings import BaseSettings
from typing import Optional, List

from brandservice.utils.exceptions import ConfigurationError


REQUIRED_ENV_VARS = ("API_BASE_URL", "API_KEY")


class Settings(BaseSettings):
    """Application settings"""

    # Server settings
    APP_NAME: str = "Brand Service MCP"
    SERVER_NAME: str = "brandService"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 5051

    # CORS settings
    CORS_ORIGINS: List[str] = ["*"]

    # Brand backend
    API_BASE_URL: Optional[str] = None
    API_KEY: Optional[str] = None
    API_DOMAIN: str = "tyedukondalu-brandsnap.com"
    MCP_TOOL_TIMEOUT_MS: int = 15000
    USER_AGENT: str = "BrandService-MCP/1.0.0"

    # Inbound guard for the HTTP front end. Unset means open.
    MCP_HTTP_API_KEY: Optional[str] = None
    # Upper bound on HTTP sessions kept in memory
    MCP_MAX_SESSIONS: int = 1000

    # Attach the session token to /auth/public-forward calls
    FORWARD_PUBLIC_ATTACH_TOKEN: bool = False

    # Mask tokens in the raw JSON of login/refreshToken results
    REDACT_AUTH_TOKENS: bool = False

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None  # Path to log file. If None, logs only go to stderr.

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()


def validate_environment(config: Optional[Settings] = None) -> Settings:
    """
    Check that the backend connection settings are present.

    Raises:
        ConfigurationError: naming every missing variable
    """
    config = config or settings
    missing = [name for name in REQUIRED_ENV_VARS if not getattr(config, name)]
    if missing:
        raise ConfigurationError(f"Missing required environment variables: {', '.join(missing)}")
    return config
