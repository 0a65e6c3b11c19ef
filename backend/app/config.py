"""
Configuration settings loaded from environment variables.
"""
from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Optional, List
from dotenv import load_dotenv
from pathlib import Path

# Determine .env file path (backend/.env)
_env_path = Path(__file__).parent.parent / ".env"

# Load environment variables from .env file
# Use override=True to ensure environment variables take precedence over defaults
load_dotenv(dotenv_path=_env_path, override=True)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Google Cloud Platform settings
    gcp_credentials_path: str = Field(
        default="",
        alias="GOOGLE_APPLICATION_CREDENTIALS",
        description="Path to a service account JSON key file (Application Default Credentials if empty)"
    )
    gcp_project_id: str = Field(
        default="",
        alias="PROJECT_ID",
        description="Google Cloud Platform project ID"
    )

    # Google Document AI settings
    documentai_location: str = Field(
        default="us",
        alias="LOCATION",
        description="Document AI processor location (e.g., us, eu)"
    )
    documentai_processor_id: str = Field(
        default="",
        alias="PROCESSOR_ID",
        description="Document AI processor ID"
    )
    documentai_processor_name: Optional[str] = Field(
        default=None,
        alias="DOCUMENTAI_PROCESSOR_NAME",
        description=(
            "Full processor name (projects/PROJECT_ID/locations/LOCATION/processors/PROCESSOR_ID). "
            "Overrides PROJECT_ID/LOCATION/PROCESSOR_ID when set"
        )
    )
    documentai_mime_type: str = Field(
        default="image/jpeg",
        alias="DOCUMENTAI_MIME_TYPE",
        description="MIME type sent with the raw document"
    )

    # Timestamp settings
    timestamp_timezone: str = Field(
        default="UTC",
        alias="TIMESTAMP_TIMEZONE",
        description="IANA timezone used to render EXIF epoch timestamps"
    )

    # Application settings
    log_level: str = Field(
        default="info",
        alias="LOG_LEVEL",
        description="Logging level"
    )
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:8000,http://127.0.0.1:3000,http://127.0.0.1:8000",
        alias="CORS_ORIGINS",
        description="Comma-separated list of allowed CORS origins"
    )

    @property
    def cors_origin_list(self) -> List[str]:
        """Allowed CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    model_config = {
        "env_file": str(_env_path),  # Use explicit .env file path
        "case_sensitive": False,
        "env_file_encoding": "utf-8",
    }


# Create a singleton settings instance
settings = Settings()
