# Standard library imports
import os
from typing import Final, List, Optional


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() == "true"


class Settings:
    """
    Application settings loaded from environment variables.

    This class centralizes all configuration settings for the application.
    All settings are loaded from environment variables with sensible defaults.
    """

    def __init__(self) -> None:
        # Database Configuration
        self.use_local_db: Final[bool] = _env_flag("USE_LOCAL_DB", "true")
        self.local_mongo_uri: Final[str] = os.getenv("LOCAL_MONGO_URI", "mongodb://localhost:27017")
        self.atlas_mongo_uri: Final[str] = os.getenv("ATLAS_MONGO_URI", "")
        self.fallback_mongo_uri: Final[str] = os.getenv("MONGO_URI", "")
        self.mongo_database_name: Final[str] = os.getenv("MONGO_DB_NAME", "user_management")
        self.mongo_server_selection_timeout_ms: Final[int] = int(
            os.getenv("MONGO_SERVER_SELECTION_TIMEOUT_MS", "10000")
        )
        self.mongo_max_pool_size: Final[int] = int(os.getenv("MONGO_MAX_POOL_SIZE", "10"))

        # Security Configuration
        self.bcrypt_rounds: Final[int] = int(os.getenv("BCRYPT_ROUNDS", "10"))

        # Server Configuration
        self.host: Final[str] = os.getenv("HOST", "0.0.0.0")
        self.port: Final[int] = int(os.getenv("PORT", "3051"))
        self.log_level: Final[str] = os.getenv("LOG_LEVEL", "INFO").upper()
        self.cors_origins: Final[List[str]] = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "*").split(",")
            if origin.strip()
        ]

    @property
    def mongo_label(self) -> str:
        """Which MongoDB deployment the URI points at (LOCAL or ATLAS)"""
        return "LOCAL" if self.use_local_db else "ATLAS"

    @property
    def mongo_uri(self) -> str:
        """
        Pick the MongoDB URI according to USE_LOCAL_DB

        Returns:
            LOCAL_MONGO_URI when USE_LOCAL_DB is true, ATLAS_MONGO_URI otherwise.
            MONGO_URI is used when the selected variable is empty.

        Raises:
            RuntimeError: If no URI is configured for the selected deployment
        """
        uri = self.local_mongo_uri if self.use_local_db else self.atlas_mongo_uri
        uri = uri or self.fallback_mongo_uri
        if not uri:
            raise RuntimeError(f"{self.mongo_label} MongoDB URI is not defined in .env")
        return uri


# Global settings instance (singleton pattern)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings (singleton pattern)

    Returns:
        Settings instance with all configuration values
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment"""
    global _settings
    _settings = None
