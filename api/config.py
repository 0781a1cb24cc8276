"""
Record Catalog API Configuration
Environment variable loading with validation and safe defaults
"""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

_TRUE_VALUES = ("true", "1", "yes")
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """Configuration validation error"""
    pass


def _env_bool(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).lower() in _TRUE_VALUES


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")


class Config:
    """Application configuration with environment variable validation"""

    # Application configuration
    APP_ENV: str = "development"
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 8080
    APP_DEBUG: bool = False
    APP_LOG_LEVEL: str = "INFO"

    # Catalog configuration
    CATALOG_SEED: bool = True

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_DEFAULT: str = "100/minute"
    RATE_LIMIT_STORAGE_URI: str = "memory://"

    def __init__(self):
        """Initialize and validate configuration"""
        self._load_env_vars()
        self._validate_config()

    def _load_env_vars(self) -> None:
        """Load environment variables with defaults"""
        self.APP_ENV = os.getenv("APP_ENV", self.APP_ENV)
        self.APP_HOST = os.getenv("APP_HOST", self.APP_HOST)
        self.APP_PORT = _env_int("APP_PORT", self.APP_PORT)
        self.APP_DEBUG = _env_bool("APP_DEBUG", self.APP_DEBUG)
        self.APP_LOG_LEVEL = os.getenv("APP_LOG_LEVEL", self.APP_LOG_LEVEL).upper()

        self.CATALOG_SEED = _env_bool("CATALOG_SEED", self.CATALOG_SEED)

        self.RATE_LIMIT_ENABLED = _env_bool("RATE_LIMIT_ENABLED", self.RATE_LIMIT_ENABLED)
        self.RATE_LIMIT_DEFAULT = os.getenv("RATE_LIMIT_DEFAULT", self.RATE_LIMIT_DEFAULT)
        self.RATE_LIMIT_STORAGE_URI = os.getenv(
            "RATE_LIMIT_STORAGE_URI", self.RATE_LIMIT_STORAGE_URI
        )

    def _validate_config(self) -> None:
        """Validate configuration values"""
        if not 1 <= self.APP_PORT <= 65535:
            raise ConfigError("APP_PORT must be between 1 and 65535")

        if self.APP_LOG_LEVEL not in _LOG_LEVELS:
            raise ConfigError(
                f"Invalid APP_LOG_LEVEL: must be one of {', '.join(_LOG_LEVELS)}"
            )

        # slowapi limit strings look like "100/minute" or "5 per second"
        if self.RATE_LIMIT_ENABLED and not any(
            sep in self.RATE_LIMIT_DEFAULT for sep in ("/", " per ")
        ):
            raise ConfigError(
                "Invalid RATE_LIMIT_DEFAULT: expected a limit such as '100/minute'"
            )

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.APP_ENV.lower() == "production"

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.APP_ENV.lower() == "development"
