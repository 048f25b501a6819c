"""
Configuration settings for trackbubbles.

Uses Pydantic Settings to load environment variables for the data source,
chart geometry, animation timings, and logging.
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Data
    data_path: str = Field("spotify_sampled.csv", alias="DATA_PATH")
    output_path: str = Field("results/bubbles.html", alias="OUTPUT_PATH")
    top_n: int = Field(300, alias="TOP_N", ge=1)
    min_release_year: int = Field(2021, alias="MIN_RELEASE_YEAR")

    # Chart geometry (outer size, margins are subtracted for the plot area)
    chart_width: int = Field(1100, alias="CHART_WIDTH")
    chart_height: int = Field(650, alias="CHART_HEIGHT")
    margin_top: int = Field(60, alias="MARGIN_TOP")
    margin_right: int = Field(40, alias="MARGIN_RIGHT")
    margin_bottom: int = Field(80, alias="MARGIN_BOTTOM")
    margin_left: int = Field(100, alias="MARGIN_LEFT")

    # Animation
    entrance_duration_ms: float = Field(2000.0, alias="ENTRANCE_DURATION_MS")
    entrance_stagger_ms: float = Field(15.0, alias="ENTRANCE_STAGGER_MS")
    hover_duration_ms: float = Field(200.0, alias="HOVER_DURATION_MS")

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    json_logs: bool = Field(False, alias="JSON_LOGS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def plot_width(self) -> int:
        return self.chart_width - self.margin_left - self.margin_right

    @property
    def plot_height(self) -> int:
        return self.chart_height - self.margin_top - self.margin_bottom


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
