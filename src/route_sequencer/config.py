"""Application configuration and settings management."""

from typing import Any, Literal

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="ROUTESEQ_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Route Sequencer API"
    api_prefix: str = "/api"
    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=1, le=65535)
    default_algorithm: Literal["nearest_neighbor", "two_opt", "genetic", "ant_colony", "auto"] = Field(
        default="auto",
        description="Algorithm used when a request does not name one.",
    )

    two_opt_max_iterations: int = Field(default=1000, ge=1)

    genetic_generations: int = Field(default=100, ge=1)
    genetic_max_population: int = Field(default=50, ge=2)
    genetic_mutation_rate: float = Field(default=0.1, ge=0.0, le=1.0)
    genetic_elite_fraction: float = Field(default=0.2, ge=0.0, le=1.0)
    genetic_tournament_size: int = Field(default=3, ge=1)

    ant_colony_iterations: int = Field(default=50, ge=1)
    ant_count: int = Field(default=20, ge=1)
    evaporation_rate: float = Field(default=0.1, ge=0.0, le=1.0)
    pheromone_alpha: float = Field(default=1.0, ge=0.0)
    pheromone_beta: float = Field(default=2.0, ge=0.0)

    auto_small_max: int = Field(default=5, ge=1, description="Largest stop count solved with NN + 2-opt.")
    auto_medium_max: int = Field(default=20, ge=1, description="Largest stop count solved with the genetic search.")
    auto_genetic_generations: int = Field(default=50, ge=1)

    average_speed_kmh: float = Field(default=50.0, gt=0.0)
    service_minutes_per_stop: float = Field(default=0.0, ge=0.0)
    time_saved_factor: float = Field(
        default=0.1,
        ge=0.0,
        description="Minutes saved per kilometre saved, used by the comparison report.",
    )
    default_filter_radius_km: float = Field(default=50.0, gt=0.0)

    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
