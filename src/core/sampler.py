import asyncio
import logging
import math
from typing import List, Optional

from abstractions.latency_source import LatencySource
from contracts.probe_outcome import ProbeOutcome
from contracts.run_configuration import RunConfiguration
from core.cancellation import CancellationSignal
from core.profiler import Profiler

logger = logging.getLogger(__name__)


def next_tick_boundary(start: float, now: float, interval: float) -> float:
    """
    First boundary start + k * interval strictly after ``now``. Boundaries that
    passed while a slow probe was running are skipped, not replayed.
    """
    elapsed_ticks = math.floor((now - start) / interval)
    return start + (elapsed_ticks + 1) * interval


class Sampler:
    """
    Drives the measurement loop: one probe per tick at a fixed cadence until the
    tick budget is spent or cancellation is requested.
    """

    def __init__(self, latency_source: LatencySource):
        self.latency_source = latency_source
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @Profiler.profile
    async def run(
        self, config: RunConfiguration, cancel: Optional[CancellationSignal] = None
    ) -> List[ProbeOutcome]:
        """
        Run the loop on its own task and wait for it to finish.

        Args:
            config (RunConfiguration): Validated run settings.
            cancel (Optional[CancellationSignal]): Checked at every tick boundary.

        Returns:
            List[ProbeOutcome]: Outcomes in sequence order.
        """
        cancel = cancel or CancellationSignal()
        outcomes: List[ProbeOutcome] = []
        self._task = asyncio.create_task(self._tick_loop(config, cancel, outcomes))
        try:
            await self._task
        finally:
            self._task = None
        logger.info(f"Sampling of {config.target} finished after {len(outcomes)} probe(s)")
        return outcomes

    async def _tick_loop(
        self,
        config: RunConfiguration,
        cancel: CancellationSignal,
        outcomes: List[ProbeOutcome],
    ):
        loop = asyncio.get_running_loop()
        start = loop.time()
        while not cancel.is_set():
            outcomes.append(await self._probe_once(config, len(outcomes) + 1))
            if config.count and len(outcomes) >= config.count:
                break

            delay = next_tick_boundary(start, loop.time(), config.interval) - loop.time()
            if delay <= 0:
                continue
            try:
                await asyncio.wait_for(cancel.wait(), timeout=delay)
            except asyncio.TimeoutError:
                pass

    async def _probe_once(self, config: RunConfiguration, sequence: int) -> ProbeOutcome:
        try:
            latency = await self.latency_source.probe(config.target, config.probe_timeout)
        except Exception as e:
            logger.error(f"Probe {sequence} of {config.target} raised: {e}")
            latency = None

        if latency is not None and latency < 0:
            logger.warning(f"Probe {sequence} returned negative latency {latency}; ignored")
            latency = None

        outcome = ProbeOutcome.from_latency(sequence, latency)
        if outcome.success:
            logger.info(f"Probe {sequence} of {config.target}: {latency:.2f}ms")
        else:
            logger.info(f"Probe {sequence} of {config.target}: no reply")
        return outcome
