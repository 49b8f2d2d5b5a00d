import sys

from pydantic_settings import BaseSettings

_ENV_FILE = None if "pytest" in sys.modules else ".env"


class Settings(BaseSettings):
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    HR_API_BASE_URL: str = "http://localhost:8000/api/"
    HR_API_TIMEOUT_SECONDS: float = 30.0

    SESSION_FILE: str = ".hrconsole-session.json"

    EMAIL_DOMAIN: str = "@bashyamgroup.com"

    PAGE_SIZE: int = 5
    MAX_VISIBLE_PAGES: int = 5
    SEARCH_DEBOUNCE_SECONDS: float = 0.5
    SUGGESTION_MIN_LENGTH: int = 2

    CASUAL_LEAVE_ENTITLEMENT: float = 12
    SICK_LEAVE_ENTITLEMENT: float = 16

    CORS_ORIGINS: list[str] = ["http://localhost:3000"]

    model_config = {
        "env_file": _ENV_FILE,
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }


settings = Settings()
