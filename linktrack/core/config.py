from typing import List, Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "Link Tracker"
    PORT: int = 3000

    # Public prefix for short links, defaults to http://localhost:{PORT}
    BASE_URL: Optional[str] = None

    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_MAX_CONNECTIONS: int = 50

    SHORT_ID_LENGTH: int = 9
    CORS_ORIGINS: List[str] = ["*"]

    # Built dashboard; index.html is served when a short id does not resolve
    STATIC_DIR: Optional[str] = None
    LOG_LEVEL: str = "INFO"

    @model_validator(mode="after")
    def default_base_url(self):
        if not self.BASE_URL:
            self.BASE_URL = f"http://localhost:{self.PORT}"
        self.BASE_URL = self.BASE_URL.rstrip("/")
        return self

    class Config:
        env_file = ".env"

settings = Settings()
