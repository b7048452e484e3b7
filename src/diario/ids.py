"""Identifier generation for projects, sections and tasks."""

import time

_last_id = 0

def new_id() -> str:
    """
    Return a new entity id: milliseconds since the epoch, as a decimal string.

    Ids are strictly increasing within one process; when two calls land in the
    same millisecond the second one is bumped past the first.
    """
    global _last_id
    candidate = time.time_ns() // 1_000_000
    if candidate <= _last_id:
        candidate = _last_id + 1
    _last_id = candidate
    return str(candidate)
