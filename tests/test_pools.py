import random
import threading
import time

from wgkit.pools import WaitPool


def test_wait_pool_never_exceeds_maximum():
    workers = 6
    pool = WaitPool(workers - 4, lambda: bytearray(16))
    trials = [2000]
    trials_lock = threading.Lock()
    observed = []
    observed_lock = threading.Lock()

    def record():
        count = pool.count
        with observed_lock:
            observed.append(count)

    def take_trial():
        with trials_lock:
            trials[0] -= 1
            return trials[0] > 0

    def worker():
        while take_trial():
            record()
            item = pool.get()
            record()
            time.sleep(random.randrange(100) / 1_000_000)
            record()
            pool.put(item)
            record()

    threads = [threading.Thread(target=worker) for _ in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert max(observed) == pool.maximum
    assert pool.count == 0


def test_items_are_reused():
    created = []

    def factory():
        obj = object()
        created.append(obj)
        return obj

    pool = WaitPool(0, factory)
    first = pool.get()
    pool.put(first)
    assert pool.get() is first
    assert len(created) == 1


def test_unbounded_pool_does_not_count():
    pool = WaitPool(0, list)
    items = [pool.get() for _ in range(10)]
    assert len(items) == 10
    assert pool.count == 0


def test_get_blocks_until_put():
    pool = WaitPool(1, list)
    first = pool.get()
    assert pool.count == 1
    got = []
    waiter = threading.Thread(target=lambda: got.append(pool.get()))
    waiter.start()
    waiter.join(timeout=0.1)
    assert waiter.is_alive()
    assert got == []
    pool.put(first)
    waiter.join(timeout=2)
    assert not waiter.is_alive()
    assert got == [first]
    assert pool.count == 1