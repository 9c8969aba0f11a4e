"""Record id generation."""

import time

_last_id = 0


def new_id() -> str:
    """Return a fresh timestamp-based record id.

    Ids are milliseconds since the epoch, bumped by one when two ids are
    requested within the same millisecond in this process.
    """
    global _last_id
    candidate = int(time.time() * 1000)
    if candidate <= _last_id:
        candidate = _last_id + 1
    _last_id = candidate
    return str(candidate)
