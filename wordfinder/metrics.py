import logging
import time
from contextlib import contextmanager

logger = logging.getLogger("wordfinder")


class StageTimer:
    """Times the stages of one run (matrix setup, search, ...) and logs progress."""

    def __init__(self):
        self.timings: dict[str, float] = {}
        self._start = time.perf_counter()

    @contextmanager
    def stage(self, name: str):
        logger.info("Started %s", name)
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.timings[name] = round((time.perf_counter() - t0) * 1000, 1)  # ms
        logger.info("Finished %s. Elapsed: %.1f ms", name, self.timings[name])

    @property
    def total_ms(self) -> float:
        return round((time.perf_counter() - self._start) * 1000, 1)

    def summary(self) -> dict:
        return {**self.timings, "total": self.total_ms}
