from typing import List, Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "Membership Admin API"
    ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # -------------------------------------------------
    # CORS (dashboard is served from anywhere)
    # -------------------------------------------------
    BACKEND_CORS_ORIGINS: List[str] = ["*"]

    # -------------------------------------------------
    # Supabase (Primary DB & Auth)
    # -------------------------------------------------
    SUPABASE_URL: Optional[str] = None
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = None

    # -------------------------------------------------
    # Authorization
    # -------------------------------------------------
    # When False the server only checks role names; the (resource, action)
    # capability is advisory for the dashboard.
    ENFORCE_CAPABILITIES: bool = False

    # -------------------------------------------------
    # Password policy
    # -------------------------------------------------
    PASSWORD_MIN_LENGTH: int = 8

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    class Config:
        case_sensitive = True


# Instantiate settings
settings = Settings()
