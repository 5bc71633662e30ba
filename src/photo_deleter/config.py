"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from photo_deleter.domain.assets import TargetSize

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    immich_base_url: str
    immich_api_key: str
    supabase_url: str
    supabase_service_key: str
    api_token: str | None = None
    log_level: str = "INFO"
    quarantine_album_name: str = "To Delete"
    processed_ids_key: str = "processedPhotoIds"
    image_target_width: int = 800
    image_target_height: int = 800
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def image_target_size(self) -> TargetSize:
        """Bounding box requested for displayed photos."""
        return TargetSize(
            width=self.image_target_width, height=self.image_target_height
        )
