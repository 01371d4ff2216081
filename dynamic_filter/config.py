from pydantic_settings import BaseSettings
from typing import List
from pathlib import Path


class LoggingSettings(BaseSettings):
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_DIR: str = "logs"
    FILTER_LOG_FILE: str = "logs/filter.log"
    API_LOG_FILE: str = "logs/dynamic_filter.log"
    ENABLE_FILE_LOGGING: bool = True
    ENABLE_CONSOLE_LOGGING: bool = True
    MAX_LOG_FILE_SIZE: int = 10 * 1024 * 1024  # 10MB
    MAX_LOG_FILE_COUNT: int = 5


class FilterSettings(BaseSettings):
    MAX_CONDITIONS: int = 50

    # Export
    EXPORT_FILENAME_PREFIX: str = "employee-export"
    CSV_LIST_SEPARATOR: str = "; "


class Settings(BaseSettings):
    # Base settings
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Dynamic Filter API"
    DEBUG: bool = False

    # CORS settings
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Sub-configurations
    logging: LoggingSettings = LoggingSettings()
    filter: FilterSettings = FilterSettings()

    model_config = {"env_file": ".env", "extra": "allow"}

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._create_directories()

    def _create_directories(self):
        """Create the log directory when file logging is on"""
        if self.logging.ENABLE_FILE_LOGGING:
            Path(self.logging.LOG_DIR).mkdir(parents=True, exist_ok=True)


# Initialize settings
settings = Settings()
