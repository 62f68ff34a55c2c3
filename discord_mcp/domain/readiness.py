"""One-shot readiness flag shared by the platform client and the bridge."""

import asyncio


class ReadinessGate:
    """Flips false -> true once, never resets."""

    def __init__(self):
        self._event = asyncio.Event()

    @property
    def is_ready(self) -> bool:
        return self._event.is_set()

    def mark_ready(self) -> bool:
        """Open the gate. Returns True only for the call that flipped it."""
        if self._event.is_set():
            return False
        self._event.set()
        return True

    async def wait(self) -> None:
        await self._event.wait()
