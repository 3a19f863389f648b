from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    app_name: str = "VibeRooms Behavior Engine"
    default_count: int = Field(default=5, ge=1)
    catalog_path: Path | None = None
    log_events: bool = False
    # env config
    model_config = SettingsConfigDict(
        env_prefix="VIBEROOMS_", env_file=".env", extra="ignore"
    )
