"""SignalHandler - turns SIGINT/SIGTERM into an orderly quit."""

from __future__ import annotations

import asyncio
import logging
import signal
from collections.abc import Callable


class SignalHandler:
    """Calls ``on_shutdown`` once, on the first SIGINT or SIGTERM."""

    def __init__(self, on_shutdown: Callable[[], None]) -> None:
        self.on_shutdown = on_shutdown
        self.shutdown_initiated = False

    def handle(self, signum: int) -> None:
        # Idempotent: a second Ctrl+C while draining does nothing
        if self.shutdown_initiated:
            return
        logging.warning(f"🛑 Signal received - initiating shutdown (signal={signum})")
        self.shutdown_initiated = True
        self.on_shutdown()

    def setup_signal_handlers(self) -> None:  # pragma: no cover
        """Install the handlers on the running loop."""
        loop = asyncio.get_running_loop()
        for signum in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(signum, self.handle, signum)
