"""
Run Controller for the Trade Simulator

Drives repeated trade execution on a fixed cadence:
- Idle -> Running on start(), Running -> Idle on stop()/cancel()
- One asyncio task per controller; firings run on the event loop and
  never overlap
- Interval changes while running re-arm the pending timer
- Stopping invalidates any timer armed before the stop, including a
  wake-up that is already queued on the loop
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

from .models.simulation import RunState


logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[Any]]


class RunController:
    """
    Cancellable auto-run loop invoking a synchronous tick callback.
    """
    
    def __init__(
        self,
        on_tick: Callable[[], Any],
        interval_ms: int = 250,
        sleep: Optional[SleepFunc] = None,
    ):
        """
        Initialize the controller.
        
        Args:
            on_tick: Callback run once per firing (one trade)
            interval_ms: Delay between firings in milliseconds
            sleep: Awaitable sleep primitive, defaults to asyncio.sleep
        """
        self.on_tick = on_tick
        self._interval_ms = self._coerce_interval(interval_ms)
        self._sleep: SleepFunc = sleep or asyncio.sleep
        
        self.state = RunState.IDLE
        self.tick_count = 0
        
        self._task: Optional[asyncio.Task] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._generation = 0
    
    @staticmethod
    def _coerce_interval(interval_ms: float) -> int:
        return max(1, int(interval_ms))
    
    @property
    def interval_ms(self) -> int:
        return self._interval_ms
    
    def set_interval_ms(self, interval_ms: float):
        """
        Change the firing interval. If running, the pending timer is torn
        down and re-armed so the next firing uses the new value.
        """
        self._interval_ms = self._coerce_interval(interval_ms)
        if self.is_running():
            old_task = self._task
            self._arm()
            if old_task is not None:
                old_task.cancel()
            logger.debug(f"Run controller re-armed at {self._interval_ms}ms")
    
    def is_running(self) -> bool:
        return self.state == RunState.RUNNING
    
    async def start(self):
        """Start auto-running. No-op if already running."""
        if self.is_running():
            return
        self._loop = asyncio.get_running_loop()
        self.state = RunState.RUNNING
        self._arm()
        logger.info(f"Run controller started (interval={self._interval_ms}ms)")
    
    async def stop(self):
        """Stop auto-running and wait for the loop task to unwind."""
        task = self.cancel()
        if task is not None:
            # wait() leaves the task's own cancellation unraised
            await asyncio.wait([task])
    
    def cancel(self) -> Optional[asyncio.Task]:
        """
        Synchronously stop auto-running.
        
        Returns:
            The cancelled task (if any) so async callers can await it
        """
        if not self.is_running():
            return None
        task = self._invalidate()
        if task is not None:
            task.cancel()
        logger.info("Run controller stopped")
        return task
    
    def _invalidate(self) -> Optional[asyncio.Task]:
        self._generation += 1
        self.state = RunState.IDLE
        task, self._task = self._task, None
        return task
    
    def _arm(self):
        self._generation += 1
        self._task = self._loop.create_task(self._run_loop(self._generation))
    
    def _is_current(self, generation: int) -> bool:
        return self.is_running() and generation == self._generation
    
    async def _run_loop(self, generation: int):
        """Sleep, then fire, until this generation is invalidated."""
        while self._is_current(generation):
            await self._sleep(self._interval_ms / 1000.0)
            
            if not self._is_current(generation):
                break
            
            try:
                self.on_tick()
                self.tick_count += 1
            except Exception as e:
                logger.error(f"Auto-run tick failed, stopping: {e}", exc_info=True)
                self._invalidate()
                break
