# util/timing.py
import time
from contextlib import contextmanager
from typing import Any, Iterator
import logging


@contextmanager
def timed(logger: logging.Logger, name: str, **kv: Any) -> Iterator[None]:
    """
    Usage:
      with timed(logger, "book.load", pages=120):
          ...
    Emits one line on exit: "<name>.done ms=<int> key=val ..." at INFO,
    or "<name>.failed ms=<int> ..." at WARNING when the block raised.
    """
    t0 = time.perf_counter()
    outcome = "done"
    try:
        yield
    except BaseException:
        outcome = "failed"
        raise
    finally:
        dt_ms = int((time.perf_counter() - t0) * 1000)
        suffix = "".join(f" {k}={v}" for k, v in kv.items())
        level = logging.INFO if outcome == "done" else logging.WARNING
        logger.log(level, "%s.%s ms=%d%s", name, outcome, dt_ms, suffix)
