"""Configuration Pydantic models: MathRushConfig, GameSettings, SystemConfig."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from mathrush.core.models.score import MAX_NAME_LENGTH
from mathrush.core.models.state import DEFAULT_ROUND_SECONDS


class GameSettings(BaseModel):
    """Gameplay timing and leaderboard parameters."""

    model_config = ConfigDict(extra="forbid")

    round_seconds: int = Field(
        default=DEFAULT_ROUND_SECONDS, ge=1, description="Length of one round in seconds"
    )
    tick_interval_seconds: float = Field(
        default=1.0, gt=0, description="Wall-clock seconds between countdown ticks"
    )
    success_flash_ms: int = Field(
        default=500, ge=0, description="How long the 'correct' banner stays visible"
    )
    top_scores_limit: int = Field(default=5, ge=1, description="Leaderboard rows shown")
    max_name_length: int = Field(
        default=MAX_NAME_LENGTH,
        ge=1,
        le=MAX_NAME_LENGTH,
        description="Player names are truncated to this many characters",
    )


class SystemConfig(BaseModel):
    """Non-gameplay runtime settings."""

    model_config = ConfigDict(extra="forbid")

    log_level: str = Field(default="INFO", description="Root log level")
    log_dir: str = Field(default="logs", description="Directory for rotating log files")
    storage_path: str = Field(
        default="data/mathrush_storage.json",
        description="JSON key-value file for scores (':memory:' keeps them in RAM)",
    )
    event_bus_queue_size: int = Field(default=1000, description="Max queued events")
    webui_port: int = Field(default=8080, description="NiceGUI listen port")


class MathRushConfig(BaseModel):
    """Top-level configuration, optionally loaded from ``mathrush_config.json``."""

    model_config = ConfigDict(extra="forbid")

    game: GameSettings = Field(default_factory=GameSettings)
    system: SystemConfig = Field(default_factory=SystemConfig)
