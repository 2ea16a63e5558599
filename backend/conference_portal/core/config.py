from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application
    PROJECT_NAME: str = "Conference Portal API"
    VERSION: str = "1.0.0"
    HOST: str = "0.0.0.0"
    PORT: int = 4000

    # CORS
    ALLOWED_ORIGIN: str = "http://localhost:5173"

    # Storage
    UPLOAD_DIR: str = "uploads"
    DATA_DIR: str = "data"
    DB_FILENAME: str = "registrations.json"

    # Admin
    ADMIN_PASSWORD: str = "admin123"

    # File Upload
    MAX_PAPER_SIZE_MB: int = 20
    MAX_PROOF_SIZE_MB: int = 10

    # Payment confirmation
    PAYMENT_PROOF_REQUIRED: bool = False  # when true, /confirm-payment needs a screenshot

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

    @property
    def upload_path(self) -> Path:
        return Path(self.UPLOAD_DIR)

    @property
    def db_path(self) -> Path:
        return Path(self.DATA_DIR) / self.DB_FILENAME


settings = Settings()
