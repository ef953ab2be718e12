from typing import Optional

from pydantic import BaseModel, ConfigDict


class RunSummary(BaseModel):
    """
    Aggregate statistics derived from a finished run.

    Latency fields cover successful probes only and are None when there were none.
    """

    model_config = ConfigDict(frozen=True)

    total: int = 0
    successful: int = 0
    loss_ratio: float = 0.0
    min_ms: Optional[float] = None
    max_ms: Optional[float] = None
    mean_ms: Optional[float] = None
    stddev_ms: Optional[float] = None

    @property
    def failed(self) -> int:
        return self.total - self.successful

    @property
    def loss_percent(self) -> float:
        return self.loss_ratio * 100.0
