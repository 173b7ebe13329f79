import os
from pydantic_settings import BaseSettings  # type: ignore
from typing import Optional

class Settings(BaseSettings):
    # Core
    LOG_LEVEL: str = "INFO"

    # Encryption
    # ENCRYPTION_KEY is used as-is when it is at least ENCRYPTION_KEY_MIN_LENGTH
    # characters (base64 of 32 raw bytes), otherwise the key file is used.
    ENCRYPTION_KEY: Optional[str] = None
    ENCRYPTION_KEY_MIN_LENGTH: int = 44
    ENCRYPTION_KEY_PATH: str = os.path.join("..", ".encryption-key")

    # Storage
    APPLICATIONS_DIR: str = os.path.join("..", "applications")
    CONFIG_DIR: str = os.path.join("..", "config")
    BAD_SSNS_FILE: str = "bad-ssns.json"

    class Config:
        case_sensitive = True
        env_file = ".env"
        extra = "ignore"

settings = Settings()
