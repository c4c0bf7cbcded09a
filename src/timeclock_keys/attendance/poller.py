from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..core.constants import AUTO_TAG_INTERVAL_SECONDS
from .auto_tagger import AutoTagger

logger = logging.getLogger(__name__)


class AutoTagPoller:
    """Runs the auto tagger on a fixed cadence in a background thread."""

    def __init__(
        self,
        tagger: AutoTagger,
        *,
        interval_seconds: int = AUTO_TAG_INTERVAL_SECONDS,
        clock: Callable[[], datetime] = now_local,
    ):
        self._tagger = tagger
        self._interval_seconds = max(1, int(interval_seconds))
        self._clock = clock
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def tick(self) -> int:
        try:
            created = self._tagger.run_once(now=self._clock())
        except Exception:
            logger.exception("auto_tag_tick_failed")
            return 0
        if created:
            logger.info("auto_tag_tick", extra={"created": len(created)})
        return len(created)

    def _loop(self) -> None:
        while not self._stop_event.is_set():
            self.tick()
            self._stop_event.wait(self._interval_seconds)

    def start(self) -> None:
        if self.running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._loop, name="auto-tag-poller", daemon=True)
        self._thread.start()
        logger.info("auto_tag_poller_started", extra={"interval_seconds": self._interval_seconds})

    def stop(self, timeout: float | None = 5.0) -> None:
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None
        logger.info("auto_tag_poller_stopped")
