import threading
import time

import pytest

from filetransfer.thread_pool import PoolBusy, ThreadPool


def test_all_tasks_run_and_sum_matches():
    counter = 0
    lock = threading.Lock()
    observed_active = []

    pool = ThreadPool(5)

    def task(i):
        nonlocal counter
        with lock:
            counter += i
            observed_active.append(pool.active)

    for i in range(0, 100):
        pool.submit(task, i)
    pool.join()
    active_after_join = pool.active
    pool.close()

    assert active_after_join == 0
    assert len(observed_active) == 100
    assert max(observed_active) <= 5
    assert counter == sum(range(0, 100))


def test_try_submit_reports_busy_when_full():
    release = threading.Event()
    pool = ThreadPool(5)
    try:
        for _ in range(5):
            pool.try_submit(release.wait)
        active_when_full = pool.active
        with pytest.raises(PoolBusy):
            pool.try_submit(release.wait)
        active_after_busy = pool.active
    finally:
        release.set()
        pool.close()

    assert active_when_full == 5
    assert active_after_busy == 5
    assert pool.active == 0


def test_slot_is_freed_after_task_finishes():
    pool = ThreadPool(1)
    pool.try_submit(lambda: None)
    pool.join()
    results = []
    pool.try_submit(results.append, "done")
    pool.close()
    assert results == ["done"]


def test_concurrency_never_exceeds_limit():
    running = 0
    peak = 0
    observed_active = []
    lock = threading.Lock()

    with ThreadPool(3) as pool:

        def task():
            nonlocal running, peak
            with lock:
                running += 1
                peak = max(peak, running)
                observed_active.append(pool.active)
            time.sleep(0.01)
            with lock:
                running -= 1

        for _ in range(12):
            pool.submit(task)

    assert pool.active == 0
    assert len(observed_active) == 12
    assert 1 <= max(observed_active) <= 3
    assert 1 <= peak <= 3
    assert running == 0


def test_join_on_idle_pool_returns_and_active_is_zero():
    pool = ThreadPool(2)
    pool.join()
    assert pool.active == 0


def test_active_counts_running_tasks():
    release = threading.Event()
    pool = ThreadPool(2)
    pool.submit(release.wait)
    pool.submit(release.wait)
    assert pool.active == 2
    release.set()
    pool.close()
    assert pool.active == 0


def test_submit_after_close_raises():
    pool = ThreadPool(1)
    pool.close()
    with pytest.raises(RuntimeError):
        pool.submit(lambda: None)


@pytest.mark.parametrize("size", [0, -3])
def test_invalid_size_rejected(size):
    with pytest.raises(ValueError):
        ThreadPool(size)