from pydantic_settings import BaseSettings
from typing import List, Any
import json
from pathlib import Path


def parse_cors_origins(v: Any) -> List[str]:
    """Parse CORS origins from string or list"""
    if isinstance(v, list):
        return v
    if isinstance(v, str):
        # Try JSON parsing first
        if v.startswith('['):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                pass
        # Fall back to comma-separated
        return [origin.strip() for origin in v.split(',') if origin.strip()]
    return []


class Settings(BaseSettings):
    """Application settings - all configurable via environment variables"""

    # ==========================================
    # Application
    # ==========================================
    APP_NAME: str = "GCU Alumni Portal"
    ORGANIZATION_NAME: str = "GCU Alumni Association"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    SECRET_KEY: str
    API_VERSION: str = "v1"

    # Server Configuration
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 8000

    # ==========================================
    # Database
    # ==========================================
    DATABASE_URL: str
    DB_ECHO: bool = False

    # ==========================================
    # Authentication
    # ==========================================
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440  # 24 hours
    REFRESH_TOKEN_EXPIRE_DAYS: int = 30
    BCRYPT_ROUNDS: int = 10  # matches the cost factor of existing alumni hashes

    # ==========================================
    # Email
    # ==========================================
    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_PORT: int = 465
    SMTP_USER: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_USE_TLS: bool = True  # implicit TLS on 465
    EMAIL_FROM: str = "noreply@gcualumni.org"
    EMAIL_FROM_NAME: str = "GCU Alumni Association"

    # ==========================================
    # CORS (stored as comma-separated string, parsed to list)
    # ==========================================
    CORS_ORIGINS_STR: str = "http://localhost:3000,http://127.0.0.1:3000"

    @property
    def CORS_ORIGINS(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return parse_cors_origins(self.CORS_ORIGINS_STR)

    # ==========================================
    # Rate Limiting
    # ==========================================
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_STORAGE_URI: str = "memory://"

    # ==========================================
    # Uploads & Asset Storage
    # ==========================================
    MAX_UPLOAD_SIZE: int = 10485760  # 10MB
    STORAGE_ROOT: str = ""  # empty means the backend directory
    PROFILE_PHOTO_DIR: str = "uploads/profilephotos"
    GALLERY_DIR: str = "uploads/gallery"
    PROFILE_PHOTO_SIZE: int = 350
    PROFILE_PHOTO_QUALITY: int = 50

    # ==========================================
    # Alumni Rules
    # ==========================================
    BATCH_MIN_YEAR: int = 2006
    BATCH_MAX_YEARS_AHEAD: int = 4
    RECOMMENDATION_LIMIT: int = 10

    # ==========================================
    # Logging
    # ==========================================
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/app.log"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields in .env that aren't defined in Settings

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Initialize paths after pydantic validation
        self._base_dir = Path(__file__).resolve().parent.parent.parent
        self._storage_root = Path(self.STORAGE_ROOT) if self.STORAGE_ROOT else self._base_dir

        if self.LOG_FILE:
            Path(self.LOG_FILE).parent.mkdir(exist_ok=True, parents=True)

    @property
    def STORAGE_ROOT_DIR(self) -> Path:
        return self._storage_root


# Create settings instance
settings = Settings()
