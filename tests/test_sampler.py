import asyncio
import unittest

from contracts.run_configuration import RunConfiguration
from core.cancellation import CancellationSignal
from core.fake_latency_source import FakeLatencySource
from core.sampler import Sampler, next_tick_boundary


def fast_config(**overrides):
    # model_construct skips the one-second interval floor so tests run quickly
    values = {"target": "test-host", "count": 3, "interval": 0.01, "probe_timeout": 1.0}
    values.update(overrides)
    return RunConfiguration.model_construct(**values)


class CancellingSource(FakeLatencySource):
    """Sets the cancellation signal once ``after`` probes have completed."""

    def __init__(self, cancel, after, **kwargs):
        super().__init__(**kwargs)
        self.cancel = cancel
        self.after = after

    async def probe(self, target, timeout=5.0):
        result = await super().probe(target, timeout)
        if len(self.calls) >= self.after:
            self.cancel.set("test")
        return result


class RaisingSource(FakeLatencySource):
    async def probe(self, target, timeout=5.0):
        self.calls.append(target)
        if len(self.calls) == 2:
            raise RuntimeError("probe blew up")
        return 5.0


class TestNextTickBoundary(unittest.TestCase):
    def test_next_boundary(self):
        self.assertEqual(next_tick_boundary(0.0, 0.2, 1.0), 1.0)
        self.assertEqual(next_tick_boundary(10.0, 10.0, 1.0), 11.0)

    def test_missed_boundaries_are_skipped(self):
        self.assertEqual(next_tick_boundary(0.0, 2.5, 1.0), 3.0)


class TestSampler(unittest.IsolatedAsyncioTestCase):
    async def test_runs_exactly_count_ticks(self):
        source = FakeLatencySource([10.0, None, 30.0, 40.0])
        outcomes = await Sampler(source).run(fast_config(count=3))
        self.assertEqual([o.sequence for o in outcomes], [1, 2, 3])
        self.assertEqual([o.success for o in outcomes], [True, False, True])
        self.assertEqual(outcomes[2].latency_ms, 30.0)
        self.assertEqual(len(source.calls), 3)

    async def test_sequence_numbers_strictly_increase(self):
        source = FakeLatencySource([1.0], cycle=True)
        outcomes = await Sampler(source).run(fast_config(count=7, interval=0.001))
        self.assertEqual([o.sequence for o in outcomes], list(range(1, 8)))
        timestamps = [o.timestamp for o in outcomes]
        self.assertEqual(timestamps, sorted(timestamps))

    async def test_keeps_cadence(self):
        loop = asyncio.get_running_loop()
        source = FakeLatencySource([1.0], cycle=True)
        start = loop.time()
        await Sampler(source).run(fast_config(count=3, interval=0.05))
        # first probe is immediate, two more waits follow
        self.assertGreaterEqual(loop.time() - start, 0.09)

    async def test_unbounded_run_stops_on_cancellation(self):
        for k in (1, 2, 5):
            cancel = CancellationSignal()
            source = CancellingSource(cancel, after=k, script=[2.0], cycle=True)
            outcomes = await asyncio.wait_for(
                Sampler(source).run(fast_config(count=0), cancel), timeout=5
            )
            self.assertGreaterEqual(len(outcomes), k)
            self.assertLessEqual(len(outcomes), k + 1)

    async def test_already_cancelled_produces_nothing(self):
        cancel = CancellationSignal()
        cancel.set()
        source = FakeLatencySource([1.0], cycle=True)
        outcomes = await Sampler(source).run(fast_config(count=0), cancel)
        self.assertEqual(outcomes, [])
        self.assertEqual(source.calls, [])

    async def test_cancellation_interrupts_wait_between_ticks(self):
        loop = asyncio.get_running_loop()
        cancel = CancellationSignal()
        config = RunConfiguration(target="test-host", count=0, interval=5)
        source = FakeLatencySource([1.0], cycle=True)
        loop.call_later(0.05, cancel.set, "test")
        start = loop.time()
        outcomes = await asyncio.wait_for(Sampler(source).run(config, cancel), timeout=2)
        self.assertEqual(len(outcomes), 1)
        self.assertLess(loop.time() - start, 2)

    async def test_cancellation_also_ends_bounded_run(self):
        cancel = CancellationSignal()
        source = CancellingSource(cancel, after=2, script=[2.0], cycle=True)
        outcomes = await Sampler(source).run(fast_config(count=10), cancel)
        self.assertIn(len(outcomes), (2, 3))

    async def test_probe_exception_recorded_as_failure(self):
        source = RaisingSource()
        outcomes = await Sampler(source).run(fast_config(count=3))
        self.assertEqual([o.success for o in outcomes], [True, False, True])

    async def test_negative_latency_recorded_as_failure(self):
        source = FakeLatencySource([-3.0, 4.0])
        outcomes = await Sampler(source).run(fast_config(count=2))
        self.assertFalse(outcomes[0].success)
        self.assertTrue(outcomes[1].success)

    async def test_running_flag(self):
        sampler = Sampler(FakeLatencySource([1.0]))
        self.assertFalse(sampler.running)
        await sampler.run(fast_config(count=1))
        self.assertFalse(sampler.running)


if __name__ == "__main__":
    unittest.main()
