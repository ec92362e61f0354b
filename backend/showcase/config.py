"""Application settings read from the environment."""

import os
from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_PORT = 5000
DEFAULT_MAX_IMAGES = 5


class Settings(BaseModel):
    """Runtime configuration for the submissions service."""

    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    database_path: Path = Path("./database/database.sqlite")
    upload_path: Path = Path("./uploads")
    max_images: int = Field(default=DEFAULT_MAX_IMAGES, ge=1)
    log_level: str = "INFO"
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables, falling back to defaults."""
        origins = os.getenv("CORS_ORIGINS", "*")
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", str(DEFAULT_PORT))),
            database_path=Path(os.getenv("DATABASE_PATH", "./database/database.sqlite")),
            upload_path=Path(os.getenv("UPLOAD_PATH", "./uploads")),
            max_images=int(os.getenv("MAX_IMAGES", str(DEFAULT_MAX_IMAGES))),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        )
