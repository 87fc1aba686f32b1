"""Configuration management."""

import os
from pathlib import Path

from dotenv import dotenv_values
from pydantic import Field
from pydantic_settings import BaseSettings

# Load .env for local runs, without overriding variables already set
env_file = Path.cwd() / ".env"

if env_file.exists():
    file_env = dotenv_values(env_file)
    for key, value in file_env.items():
        if key not in os.environ and value is not None:
            os.environ[key] = value


class Settings(BaseSettings):
    """Simulation settings pulled from PY_FLOOD_* environment variables."""

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="console", description="Log format (console or json)")

    # Visualization
    frame_delay: float = Field(
        default=0.5, ge=0.0, description="Pause in seconds after each animation frame"
    )
    renderer: str = Field(default="shade", description="Text renderer (basic, values or shade)")

    # Propagation
    max_recursion_depth: int = Field(
        default=100_000,
        gt=0,
        description="Largest floodable area the recursive strategy accepts",
    )

    class Config:
        env_prefix = "PY_FLOOD_"
        extra = "ignore"


settings = Settings()
