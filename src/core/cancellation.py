import asyncio
import logging
import signal
from contextlib import contextmanager
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class CancellationSignal:
    """
    Set-once flag observed by the sampling loop. Once set it stays set.
    """

    def __init__(self):
        self._event = asyncio.Event()
        self.reason: Optional[str] = None

    def set(self, reason: str = "cancelled"):
        if self._event.is_set():
            return
        self.reason = reason
        self._event.set()
        logger.info(f"Cancellation requested ({reason})")

    def is_set(self) -> bool:
        return self._event.is_set()

    async def wait(self):
        await self._event.wait()


@contextmanager
def cancel_on_signals(cancel: CancellationSignal, signals=DEFAULT_SIGNALS):
    """
    Route OS signals to ``cancel`` for the duration of the block. Must be entered
    from a coroutine running on the event loop.
    """
    loop = asyncio.get_running_loop()
    loop_handled = []
    previous = {}

    def _threadsafe_handler(signum, frame):
        loop.call_soon_threadsafe(cancel.set, signal.Signals(signum).name)

    for sig in signals:
        try:
            loop.add_signal_handler(sig, cancel.set, sig.name)
            loop_handled.append(sig)
            continue
        except (NotImplementedError, RuntimeError, ValueError):
            # no loop support (e.g. Windows), fall back to a plain handler
            pass
        try:
            previous[sig] = signal.signal(sig, _threadsafe_handler)
        except ValueError as e:
            logger.warning(f"Cannot install handler for {sig.name}: {e}")

    try:
        yield cancel
    finally:
        for sig in loop_handled:
            loop.remove_signal_handler(sig)
        for sig, handler in previous.items():
            signal.signal(sig, handler)
