from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ProbeOutcome(BaseModel):
    """
    Data model representing the recorded result of a single probe.
    """

    model_config = ConfigDict(frozen=True)

    sequence: int = Field(ge=1)
    timestamp: datetime
    latency_ms: Optional[float] = Field(default=None, ge=0.0)
    success: bool = False

    @model_validator(mode="after")
    def _latency_matches_success(self):
        """
        A latency is present if and only if the probe succeeded.
        """
        if self.success and self.latency_ms is None:
            raise ValueError("successful outcome requires latency_ms")
        if not self.success and self.latency_ms is not None:
            raise ValueError("failed outcome must not carry latency_ms")
        return self

    @classmethod
    def from_latency(cls, sequence: int, latency_ms: Optional[float], timestamp=None):
        """
        Build an outcome from a latency source result (None means failure).
        """
        return cls(
            sequence=sequence,
            timestamp=timestamp or datetime.now(),
            latency_ms=latency_ms,
            success=latency_ms is not None,
        )

    def __repr__(self):
        value = f"{self.latency_ms:.2f}ms" if self.success else "FAILED"
        return f"ProbeOutcome(sequence={self.sequence}, {value})"
