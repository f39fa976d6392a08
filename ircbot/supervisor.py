"""Reconnect policy layered on top of single IRC sessions."""

from __future__ import annotations

import asyncio
import logging

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from .config.model import BotConfig
from .constants import (
    RECONNECT_BACKOFF_MULTIPLIER,
    RECONNECT_MAX_ATTEMPTS,
    RECONNECT_MAX_BACKOFF_SECONDS,
)
from .errors.internal import NetworkError
from .irc.callbacks import CallbackRegistry
from .irc.client import ConnectionFactory, IRCClient
from .logs.logger import logger


class BotSupervisor:
    """Runs sessions until a requested stop, reconnecting after network errors.

    The registry is built once and shared by every session. Each session gets
    a fresh IRCClient, so joined channels and state start over.
    """

    def __init__(
        self,
        config: BotConfig,
        registry: CallbackRegistry,
        *,
        max_attempts: int = RECONNECT_MAX_ATTEMPTS,
        backoff_multiplier: float = RECONNECT_BACKOFF_MULTIPLIER,
        max_backoff: float = RECONNECT_MAX_BACKOFF_SECONDS,
        connection_factory: ConnectionFactory | None = None,
    ) -> None:
        self.config = config
        self.registry = registry
        self.max_attempts = max_attempts
        self.backoff_multiplier = backoff_multiplier
        self.max_backoff = max_backoff
        self.connection_factory = connection_factory
        self.client: IRCClient | None = None
        self.sessions = 0
        self._stopping = False
        self._last_registered = False

    def stop(self, reason: str = "Shutting down") -> None:
        """Quit the current session and suppress further reconnects."""
        self._stopping = True
        if self.client is not None:
            self.client.writer.quit(reason)

    def _should_retry(self, error: BaseException) -> bool:
        # A session that got as far as the welcome restarts the loop instead
        return (
            isinstance(error, NetworkError)
            and not self._stopping
            and not self._last_registered
        )

    def _before_sleep(self, retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        wait = retry_state.next_action.sleep if retry_state.next_action else 0.0
        logger.log_event(
            "supervisor",
            "reconnect_wait",
            level=logging.WARNING,
            user=self.config.nickname,
            attempt=retry_state.attempt_number,
            wait=round(wait, 1),
            error=str(error),
        )

    def _retrying(self) -> AsyncRetrying:
        return AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(
                multiplier=self.backoff_multiplier, max=self.max_backoff
            ),
            retry=retry_if_exception(self._should_retry),
            before_sleep=self._before_sleep,
            reraise=True,
        )

    async def run(self) -> None:
        """Run until ``stop()`` or until reconnect attempts are exhausted.

        The attempt budget counts consecutive sessions that never reached the
        server welcome; losing a registered session starts a fresh budget.
        A failure after ``stop()`` ends the run without an error.

        Raises:
            NetworkError: The last transport failure once attempts run out.
        """
        while True:
            try:
                async for attempt in self._retrying():
                    with attempt:
                        await self._run_session()
            except NetworkError as e:
                if self._stopping:
                    break
                if not self._last_registered:
                    raise
                logger.log_event(
                    "supervisor",
                    "retry_budget_reset",
                    level=logging.WARNING,
                    user=self.config.nickname,
                    error=str(e),
                )
                await asyncio.sleep(min(self.backoff_multiplier, self.max_backoff))
                continue
            break
        logger.log_event("supervisor", "finished", user=self.config.nickname)

    async def _run_session(self) -> None:
        if self._stopping:
            return
        self.sessions += 1
        self._last_registered = False
        self.client = IRCClient(
            self.config,
            self.registry,
            connection_factory=self.connection_factory,
        )
        logger.log_event(
            "supervisor",
            "session_start",
            user=self.config.nickname,
            session=self.sessions,
            server=self.config.host,
        )
        try:
            await self.client.run()
        finally:
            self._last_registered = self.client.registered
            self.client = None
