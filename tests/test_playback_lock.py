from qwerty_learner.services.playback_lock import PlaybackLock


def test_second_request_is_dropped_while_locked() -> None:
    lock = PlaybackLock()
    token = lock.try_acquire()
    assert token is not None
    assert lock.locked
    assert lock.try_acquire() is None
    assert lock.release(token)
    assert not lock.locked
    assert lock.try_acquire() is not None


def test_stale_completion_does_not_release_newer_request() -> None:
    lock = PlaybackLock()
    old = lock.try_acquire()
    lock.reset()
    new = lock.try_acquire()
    assert not lock.release(old)
    assert lock.locked
    assert lock.release(new)
