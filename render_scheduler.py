#Debounced preview rendering: only the newest edit is drawn, late results from older renders are dropped
from __future__ import annotations
import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Set
from mermaid_render import RenderError
from mermaid_utils import normalize_mermaid
DEBOUNCE_SECONDS = 0.3
logger = logging.getLogger(__name__)
Renderer = Callable[[str, str], Awaitable[str]]
@dataclass
class RenderState:
    svg: str = ""
    error: str = ""
    code: str = ""
    sequence: int = 0
class RenderScheduler:
    def __init__(
        self,
        renderer: Renderer,
        delay: float = DEBOUNCE_SECONDS,
        normalize: Callable[[str], str] = normalize_mermaid,
    ):
        self.renderer = renderer
        self.delay = delay
        self.normalize = normalize
        self.source = ""
        self.sequence = 0
        self.state = RenderState()
        self._timer: Optional[asyncio.Task] = None
        self._renders: Set[asyncio.Task] = set()
    def submit(self, source: str) -> None:
        """Record a new source and restart the debounce timer. Needs a running loop."""
        self.source = source or ""
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = asyncio.get_running_loop().create_task(self._wait_then_render())
    async def _wait_then_render(self) -> None:
        await asyncio.sleep(self.delay)
        # renders run outside the timer task so a later submit() never cancels them
        task = asyncio.get_running_loop().create_task(self._render(self.source))
        self._renders.add(task)
        task.add_done_callback(self._renders.discard)
    async def _render(self, source: str) -> None:
        self.sequence += 1
        seq = self.sequence
        if not source.strip():
            self.state = RenderState(sequence=seq)
            return
        code = self.normalize(source)
        try:
            svg = await self.renderer(code, f"vm-diagram-{seq}")
        except (RenderError, ValueError) as e:
            if seq != self.sequence:
                logger.debug("Dropping stale render error %d (current %d)", seq, self.sequence)
                return
            logger.warning("Render %d failed: %s", seq, e)
            self.state.error = str(e)
            self.state.sequence = seq
            return
        if seq != self.sequence:
            logger.debug("Dropping stale render %d (current %d)", seq, self.sequence)
            return
        self.state = RenderState(svg=svg, error="", code=code, sequence=seq)
    def clear(self) -> None:
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self.source = ""
        # bumping the counter turns any render still in flight into a stale one
        self.sequence += 1
        self.state = RenderState(sequence=self.sequence)
    async def drain(self) -> RenderState:
        while True:
            pending = [t for t in self._renders if not t.done()]
            if self._timer is not None and not self._timer.done():
                pending.append(self._timer)
            if not pending:
                return self.state
            await asyncio.gather(*pending, return_exceptions=True)
