"""
Periodic refresh timer.

Runs an async callback on a fixed interval in a background task. Stopping
the timer cancels the task, including a refresh that is still awaiting the
store.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional


logger = logging.getLogger(__name__)


class PeriodicRefresher:
    """Re-invokes a callback every ``interval`` seconds until stopped."""
    
    def __init__(
        self,
        callback: Callable[[], Awaitable[None]],
        interval: float = 30.0,
    ):
        if interval <= 0:
            raise ValueError("Refresh interval must be positive")
        self.callback = callback
        self.interval = interval
        self._task: Optional[asyncio.Task] = None
    
    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()
    
    def start(self) -> None:
        """Arm the timer, replacing any running one. Needs a running event loop."""
        self.stop()
        self._task = asyncio.get_running_loop().create_task(self._run())
    
    def stop(self) -> None:
        """Cancel the timer and any refresh in flight."""
        if self._task is not None:
            self._task.cancel()
            self._task = None
    
    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                await self.callback()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Periodic refresh failed")
