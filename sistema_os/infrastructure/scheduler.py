"""Periodic trigger for the deadline reminder scan."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Sequence
from typing import Callable

import anyio

from sistema_os.application.use_cases.notifications import DeadlineScanner, ScanResult

logger = logging.getLogger(__name__)

ONE_HOUR_SECONDS = 60 * 60

Sleep = Callable[[float], Awaitable[None]]
RecipientsProvider = Callable[[], Awaitable[Sequence[str]]]


class DeadlineReminderScheduler:
    """Run the deadline scan on start and then once per ``interval`` seconds.

    Runs never overlap: the next wait only starts after the previous scan
    returned. ``sleep`` is injectable so tests can advance time explicitly.
    """

    def __init__(
        self,
        scanner: DeadlineScanner,
        recipients: RecipientsProvider,
        *,
        interval: float = ONE_HOUR_SECONDS,
        sleep: Sleep = anyio.sleep,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._scanner = scanner
        self._recipients = recipients
        self._interval = interval
        self._sleep = sleep
        self._task: asyncio.Task | None = None
        self.runs = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the periodic loop; calling it again while running is a no-op."""

        if self.running:
            logger.info("Deadline scheduler already running, skipping start")
            return
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.info(
            "Deadline scheduler started: scanning every %s seconds", self._interval
        )

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Deadline scheduler stopped after %s runs", self.runs)

    async def run_once(self) -> dict[str, ScanResult]:
        """Scan once for every known user and return the results by user."""

        results: dict[str, ScanResult] = {}
        try:
            user_ids = await self._recipients()
        except Exception:
            logger.exception("Deadline check failed: could not list users")
            return results

        for user_id in user_ids:
            result = await self._scanner.scan(user_id)
            if not result.success:
                logger.error("Deadline check failed for user %s: %s", user_id, result.error)
            results[user_id] = result
        return results

    async def _run(self) -> None:
        while True:
            try:
                await self.run_once()
            except Exception:
                logger.exception("Error in deadline reminder check")
            self.runs += 1
            await self._sleep(self._interval)


__all__ = ["DeadlineReminderScheduler", "ONE_HOUR_SECONDS"]
