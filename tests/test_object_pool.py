import threading

from trantil.object_pool import ObjectPool


def test_new_pool_creates_objects():
    created = []

    def factory():
        obj = []
        created.append(obj)
        return obj

    pool = ObjectPool(factory)
    first = pool.get_object()
    second = pool.get_object()
    assert len(created) == 2
    assert first is created[0]
    assert second is created[1]
    assert len(pool) == 0


def test_released_object_is_reused():
    pool = ObjectPool(dict)
    obj = pool.get_object()
    pool.release(obj)
    assert len(pool) == 1
    assert pool.get_object() is obj
    assert len(pool) == 0


def test_most_recently_released_first():
    pool = ObjectPool(list)
    a = pool.get_object()
    b = pool.get_object()
    pool.release(a)
    pool.release(b)
    assert pool.get_object() is b
    assert pool.get_object() is a


def test_concurrent_use_keeps_all_objects():
    pool = ObjectPool(object)
    seen = set()
    seen_lock = threading.Lock()

    def worker():
        for _ in range(200):
            obj = pool.get_object()
            with seen_lock:
                seen.add(id(obj))
            pool.release(obj)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(pool) == len(seen)
    assert len(pool) <= 4