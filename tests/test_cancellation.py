import asyncio
import os
import signal
import unittest

from core.cancellation import CancellationSignal, cancel_on_signals


class TestCancellationSignal(unittest.IsolatedAsyncioTestCase):
    async def test_initially_unset(self):
        cancel = CancellationSignal()
        self.assertFalse(cancel.is_set())
        self.assertIsNone(cancel.reason)

    async def test_set_is_monotonic(self):
        cancel = CancellationSignal()
        cancel.set("SIGINT")
        cancel.set("SIGTERM")
        self.assertTrue(cancel.is_set())
        self.assertEqual(cancel.reason, "SIGINT")

    async def test_wait_returns_once_set(self):
        cancel = CancellationSignal()
        asyncio.get_running_loop().call_later(0.01, cancel.set)
        await asyncio.wait_for(cancel.wait(), timeout=1)
        self.assertTrue(cancel.is_set())

    @unittest.skipUnless(hasattr(signal, "SIGUSR1"), "requires POSIX signals")
    async def test_os_signal_sets_cancellation(self):
        cancel = CancellationSignal()
        with cancel_on_signals(cancel, signals=(signal.SIGUSR1,)):
            os.kill(os.getpid(), signal.SIGUSR1)
            await asyncio.wait_for(cancel.wait(), timeout=1)
        self.assertTrue(cancel.is_set())
        self.assertEqual(cancel.reason, "SIGUSR1")

    @unittest.skipUnless(hasattr(signal, "SIGUSR1"), "requires POSIX signals")
    async def test_handlers_removed_on_exit(self):
        before = signal.getsignal(signal.SIGUSR1)
        with cancel_on_signals(CancellationSignal(), signals=(signal.SIGUSR1,)):
            pass
        self.assertEqual(signal.getsignal(signal.SIGUSR1), before)


if __name__ == "__main__":
    unittest.main()
