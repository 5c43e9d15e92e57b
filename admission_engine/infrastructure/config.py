#admission_engine\infrastructure\config.py

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from admission_engine.executor.config import LifecycleTimings


class SimulationSettings(BaseSettings):
    """Simulation configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ROUTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Pool and clients (prompted on stdin when unset)
    max_connections: Optional[int] = None
    total_devices: Optional[int] = None
    device_types: List[str] = Field(default_factory=lambda: ["mobile", "pc", "tablet"])

    # Lifecycle delays (seconds)
    arrival_delay_max: float = Field(default=1.0, ge=0)
    connect_delay_max: float = Field(default=1.0, ge=0)
    serve_delay_max: float = Field(default=2.0, ge=0)
    stagger_delay_max: float = Field(default=0.5, ge=0)
    admission_timeout: Optional[float] = Field(default=None, gt=0)

    # Output
    output_path: str = "output.txt"
    log_level: str = "INFO"

    @property
    def timings(self) -> LifecycleTimings:
        return LifecycleTimings(
            arrival_delay_max=self.arrival_delay_max,
            connect_delay_max=self.connect_delay_max,
            serve_delay_max=self.serve_delay_max,
            admission_timeout=self.admission_timeout,
        )
