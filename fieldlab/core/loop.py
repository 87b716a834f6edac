from __future__ import annotations

import logging
import time
from typing import Callable, Iterable, Optional

log = logging.getLogger(__name__)


def frame_waiter(fps: float, clock: Callable[[], float] = time.perf_counter,
                 sleep: Callable[[float], None] = time.sleep) -> Callable[[], None]:
    """Blocking wait that returns at the next frame deadline.

    A late frame resets the deadline instead of trying to catch up.
    """
    period = 1.0 / max(1e-6, float(fps))
    deadline = [clock() + period]

    def wait():
        now = clock()
        remaining = deadline[0] - now
        if remaining > 0:
            sleep(remaining)
            deadline[0] += period
        else:
            deadline[0] = now + period

    return wait


class FrameLoop:
    """Calls every registered callback once per frame until stopped."""

    def __init__(self, callbacks: Iterable[Callable[[], None]] = (),
                 wait_for_frame: Optional[Callable[[], None]] = None):
        self.callbacks = list(callbacks)
        self.wait_for_frame = wait_for_frame or frame_waiter(60)
        self.frames = 0
        self._stopped = False

    def add(self, callback: Callable[[], None]):
        self.callbacks.append(callback)

    def stop(self):
        self._stopped = True

    @property
    def stopped(self) -> bool:
        return self._stopped

    def run(self, max_frames: Optional[int] = None) -> int:
        rendered = 0
        while not self._stopped:
            if max_frames is not None and rendered >= max_frames:
                break
            for cb in self.callbacks:
                cb()
            rendered += 1
            self.frames += 1
            if self._stopped:
                break
            self.wait_for_frame()
        self._stopped = False
        log.debug("frame loop exited after %d frames", rendered)
        return rendered
