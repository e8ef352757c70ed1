from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Portal configuration loaded from environment variables."""

    school_api_base_url: str = Field("http://localhost:5000/api", alias="SCHOOL_API_BASE_URL")
    # None keeps the httpx default timeout
    school_api_timeout_seconds: Optional[float] = Field(None, alias="SCHOOL_API_TIMEOUT_SECONDS")

    token_store_path: str = Field(".portal_tokens.json", alias="TOKEN_STORE_PATH")

    log_level: str = Field("INFO", alias="LOG_LEVEL")
    cors_origins: List[str] = Field(["*"], alias="CORS_ORIGINS")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"
        populate_by_name = True


settings = Settings()
