from typing import List
from pydantic import BaseModel, Field


class AdmissionSnapshot(BaseModel):
    """Point-in-time view of gate and slot state (informational)."""

    capacity: int = Field(gt=0)
    available_permits: int = Field(ge=0)
    waiting: int = Field(ge=0)
    holders: int = Field(default=0, ge=0)
    occupied_slots: List[int] = Field(default_factory=list)


class SimulationSummary(BaseModel):
    capacity: int
    total_clients: int
    disconnected: int
    cancelled: int
    elapsed_seconds: float
    final_snapshot: AdmissionSnapshot

    @property
    def all_done(self) -> bool:
        return self.disconnected + self.cancelled == self.total_clients
