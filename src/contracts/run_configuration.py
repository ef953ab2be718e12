from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

MIN_INTERVAL_SECONDS = 1
MAX_PROBE_TIMEOUT_SECONDS = 60.0

SourceKind = Literal["icmp", "http", "fake"]

# image formats matplotlib's Agg canvas writes; a bare name is saved as PNG
PLOT_FORMATS = ("png", "jpg", "jpeg", "pdf", "svg", "svgz", "eps", "ps", "tif", "tiff", "webp")


class RunConfiguration(BaseModel):
    """
    Validated, immutable settings for one probing run.
    """

    model_config = ConfigDict(frozen=True)

    target: str = Field(min_length=1)
    count: int = Field(default=10, ge=0)
    interval: float = Field(default=1.0, allow_inf_nan=False)
    threshold_ms: float = Field(default=100.0, ge=0.0, allow_inf_nan=False)
    log_path: Path = Path("ping_log.txt")

    source: SourceKind = "icmp"
    probe_timeout: float = Field(
        default=5.0, gt=0.0, le=MAX_PROBE_TIMEOUT_SECONDS, allow_inf_nan=False
    )
    chart_width: int = Field(default=60, gt=0)
    chart_height: int = Field(default=12, gt=0)
    plot_path: Optional[Path] = None
    metrics_path: Optional[Path] = None

    @field_validator("target")
    @classmethod
    def _strip_target(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("target must not be blank")
        return value

    @field_validator("interval")
    @classmethod
    def _check_interval(cls, value: float) -> float:
        if value < MIN_INTERVAL_SECONDS:
            raise ValueError(
                f"interval must be at least {MIN_INTERVAL_SECONDS} second(s), got {value}"
            )
        return value

    @field_validator("plot_path")
    @classmethod
    def _check_plot_format(cls, value: Optional[Path]) -> Optional[Path]:
        if value is None or not value.suffix:
            return value
        fmt = value.suffix[1:].lower()
        if fmt not in PLOT_FORMATS:
            raise ValueError(
                f"unsupported chart format '{fmt}' (use one of: {', '.join(PLOT_FORMATS)})"
            )
        return value

    @property
    def unbounded(self) -> bool:
        return self.count == 0
