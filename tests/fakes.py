"""
Test doubles: scripted random source and a manually advanced clock.
"""

import asyncio
from typing import Iterable, List, Tuple


class ScriptedRandom:
    """Random source returning a fixed sequence of draws, cycling when exhausted."""
    
    def __init__(self, draws: Iterable[float]):
        self.draws = list(draws)
        self.calls = 0
    
    def random(self) -> float:
        value = self.draws[self.calls % len(self.draws)]
        self.calls += 1
        return value


class FakeClock:
    """
    Controlled clock for the run controller.
    
    sleep() parks the caller on a future; advance() resolves due futures in
    deadline order and lets the woken tasks run before moving on.
    """
    
    def __init__(self):
        self.now = 0.0
        self._waiters: List[Tuple[float, asyncio.Future]] = []
    
    async def sleep(self, delay: float):
        future = asyncio.get_running_loop().create_future()
        self._waiters.append((self.now + delay, future))
        await future
    
    @property
    def pending(self) -> int:
        return sum(1 for _, future in self._waiters if not future.done())
    
    def fire_due(self, target: float) -> int:
        """Resolve every sleep due by target without yielding to the loop."""
        self.now = target
        fired = 0
        for waiter in list(self._waiters):
            deadline, future = waiter
            if deadline <= target and not future.done():
                future.set_result(None)
                self._waiters.remove(waiter)
                fired += 1
        return fired
    
    async def settle(self):
        for _ in range(10):
            await asyncio.sleep(0)
    
    async def advance(self, seconds: float):
        target = self.now + seconds
        while True:
            await self.settle()
            self._waiters = [w for w in self._waiters if not w[1].done()]
            due = [w for w in self._waiters if w[0] <= target]
            if not due:
                break
            waiter = min(due, key=lambda w: w[0])
            self._waiters.remove(waiter)
            self.now = waiter[0]
            waiter[1].set_result(None)
        self.now = target
        await self.settle()
