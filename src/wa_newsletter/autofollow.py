"""
Best-effort startup task that follows a fixed set of newsletters.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Sequence

logger = logging.getLogger(__name__)

AUTO_FOLLOW_NEWSLETTERS = (
    "120363418715609508@newsletter",
    "120363406073229321@newsletter",
)
DEFAULT_AUTO_FOLLOW_DELAY_S = 90.0


class AutoFollowTask:
    """Follow `targets` once, `delay` seconds after start().

    Runs detached from every other operation: failures are logged at debug
    level and dropped, nothing is retried and nobody awaits the result.
    """

    def __init__(
        self,
        follow: Callable[[str], Awaitable[None]],
        targets: Sequence[str] = AUTO_FOLLOW_NEWSLETTERS,
        delay: float = DEFAULT_AUTO_FOLLOW_DELAY_S,
    ):
        self._follow = follow
        self._targets = tuple(targets)
        self._delay = delay
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running or not self._targets:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def _run(self) -> None:
        await asyncio.sleep(self._delay)
        try:
            for jid in self._targets:
                await self._follow(jid)
        except Exception as e:
            logger.debug(f"Auto-follow stopped: {e}")

    async def stop(self) -> None:
        if self._task is None:
            return
        task, self._task = self._task, None
        if not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
