import asyncio
from collections import deque
from typing import Iterable, Optional

from abstractions.latency_source import DEFAULT_PROBE_TIMEOUT_SECONDS, LatencySource


class FakeLatencySource(LatencySource):
    """
    Scripted latency source.

    script: latencies in milliseconds returned one per call, None entries are
    failures. Once the script is used up every call fails, unless cycle is set,
    in which case the script starts over.
    """

    def __init__(self, script: Iterable[Optional[float]] = (), delay: float = 0.0, cycle: bool = False):
        self._original = list(script)
        self._script = deque(self._original)
        self.delay = delay
        self.cycle = cycle
        self.calls = []

    async def probe(
        self, target: str, timeout: float = DEFAULT_PROBE_TIMEOUT_SECONDS
    ) -> Optional[float]:
        self.calls.append(target)
        if self.delay:
            await asyncio.sleep(min(self.delay, timeout))
        if not self._script and self.cycle:
            self._script.extend(self._original)
        if self._script:
            return self._script.popleft()
        return None
