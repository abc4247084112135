from __future__ import annotations


class PlaybackLock:
    """At most one in-flight pronunciation request.

    `try_acquire()` hands out a token; only `release(token)` with the matching
    token clears the lock, so a late completion of an older request cannot
    unlock a newer one. Requests that find the lock held are dropped by the
    caller, never queued.
    """

    def __init__(self) -> None:
        self._token = 0
        self._locked = False

    @property
    def locked(self) -> bool:
        return self._locked

    def try_acquire(self) -> int | None:
        if self._locked:
            return None
        self._token += 1
        self._locked = True
        return self._token

    def release(self, token: int) -> bool:
        if not self._locked or token != self._token:
            return False
        self._locked = False
        return True

    def reset(self) -> None:
        # Invalidate any outstanding token; its completion becomes a no-op.
        self._token += 1
        self._locked = False
