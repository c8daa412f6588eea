"""
Application configuration using Pydantic Settings.
"""

from typing import List
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Application
    app_name: str = "Adega Mufs - Monitor de Preços"
    app_version: str = "1.0.0"
    ENVIRONMENT: str = Field(default="development", description="Environment: development, staging, production")
    debug: bool = Field(default=False, description="Debug mode")

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Root log level")
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Database
    DATABASE_URL: str = Field(default="sqlite:///./price_monitor.db", description="SQLAlchemy database URL")
    AUTO_INIT_DB: bool = Field(default=True, description="Create tables and seed competitors on startup")

    # CORS
    cors_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"],
        description="Allowed CORS origins"
    )
    cors_allow_credentials: bool = True

    # JWT
    JWT_SECRET: str = Field(default="change-me-in-production", description="Secret key for JWT tokens")
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_HOURS: int = 24

    # Demo identity attached to requests without a token
    MOCK_AUTH_ENABLED: bool = True
    MOCK_USER_ID: int = 1
    MOCK_USER_EMAIL: str = "admin@adegamufs.com"
    MOCK_USER_NAME: str = "Administrador Adega Mufs"

    # Reports
    REPORT_COMPANY_NAME: str = "Adega Mufs"

    @field_validator('debug', 'reload', 'AUTO_INIT_DB', 'MOCK_AUTH_ENABLED', mode='before')
    @classmethod
    def validate_bool_flags(cls, v):
        """Allow boolean flags to be passed as strings"""
        if isinstance(v, str):
            return v.lower() in ('true', '1', 'yes', 'on')
        return bool(v)

    @field_validator('cors_origins', mode='before')
    @classmethod
    def validate_cors_origins(cls, v):
        """Accept a JSON list or a comma-separated string"""
        if isinstance(v, str):
            try:
                import json
                return json.loads(v)
            except json.JSONDecodeError:
                return [origin.strip() for origin in v.split(',') if origin.strip()]
        return v


settings = Settings()
