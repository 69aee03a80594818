import time


def _now() -> float:
    """Return the current time as epoch seconds."""
    return time.time()
