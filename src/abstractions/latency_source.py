from abc import ABC, abstractmethod
from typing import Optional

DEFAULT_PROBE_TIMEOUT_SECONDS = 5.0


class LatencySource(ABC):
    """
    Abstract base class for latency sources. Implementations perform exactly one
    reachability check against a target per call.
    """

    @abstractmethod
    async def probe(
        self, target: str, timeout: float = DEFAULT_PROBE_TIMEOUT_SECONDS
    ) -> Optional[float]:
        """
        Probe the target once and report the round-trip latency.

        Args:
            target (str): Host name, address or URL to probe.
            timeout (float): Upper bound in seconds for this single probe.

        Returns:
            Optional[float]: Latency in milliseconds, or None if the target could not
            be reached or no latency could be read from the result. Implementations
            must not raise for unreachable targets.
        """
