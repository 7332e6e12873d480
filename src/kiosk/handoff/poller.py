"""Interval polling of a custom-cake design session.

Every tick fires a poll without waiting for the previous one, so a slow
backend can have several polls in flight. The first terminal status
(completed or expired) wins and stops the poller; responses arriving after
that are ignored. Failed polls are logged and the next tick tries again,
except when the backend no longer knows the session (404 or 410) or the
session's lifetime has run out: both end polling with an expired status.
"""

import asyncio
from collections.abc import Callable

from kiosk.domain import logger
from shared.backend.errors import BackendError
from shared.backend.schemas import SessionStatus

DEFAULT_POLL_INTERVAL_SECONDS = 2.0

# Backend answers meaning the session is gone for good
SESSION_GONE_STATUS_CODES = frozenset({404, 410})


class SessionPoller:
    def __init__(
        self,
        backend,
        session_token: str,
        on_status: Callable[[SessionStatus], None] | None = None,
        interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
        expires_in: float | None = None,
    ) -> None:
        self.backend = backend
        self.session_token = session_token
        self.on_status = on_status
        self.interval = interval
        self.expires_in = expires_in
        self.last_status: SessionStatus | None = None
        self.failures = 0
        self._stopped = False
        self._tasks: set[asyncio.Task] = set()

    @property
    def stopped(self) -> bool:
        return self._stopped

    def stop(self) -> None:
        self._stopped = True

    async def run(self) -> SessionStatus | None:
        """Poll until a terminal status, expiry or ``stop()``; return the last status seen."""
        logger.info(
            "Session polling started",
            session_token=self.session_token,
            interval=self.interval,
            expires_in=self.expires_in,
        )

        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.expires_in if self.expires_in is not None else None

        while not self._stopped:
            if deadline is not None and loop.time() >= deadline:
                self._expire("Session lifetime ran out")
                break

            task = asyncio.create_task(self._poll_once())
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
            await asyncio.sleep(self.interval)

        if self._tasks:
            await asyncio.gather(*self._tasks)

        logger.info(
            "Session polling stopped",
            session_token=self.session_token,
            status=self.last_status.status if self.last_status else None,
            failures=self.failures,
        )
        return self.last_status

    async def _poll_once(self) -> None:
        try:
            status = await asyncio.to_thread(self.backend.poll_session_status, self.session_token)
        except BackendError as exc:
            if exc.status_code in SESSION_GONE_STATUS_CODES:
                self._expire(exc.message)
                return
            self.failures += 1
            logger.warning("Session poll failed", session_token=self.session_token, error=exc.message)
            return

        self._record(status)

    def _expire(self, reason: str) -> None:
        if self._stopped:
            return
        logger.info("Session expired", session_token=self.session_token, reason=reason)
        self._record(SessionStatus(status="expired"))

    def _record(self, status: SessionStatus) -> None:
        if self._stopped:
            return

        self.last_status = status
        if self.on_status:
            self.on_status(status)
        if status.is_finished:
            self.stop()
