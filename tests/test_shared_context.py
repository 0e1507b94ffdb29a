import threading

from pdmigrate.taskmanager.shared_context import SharedContext


def test_set_and_get():
    sc = SharedContext()
    sc.set("test_key", "test_value")
    assert "test_key" in sc
    assert sc.get("test_key") == "test_value"


def test_get_non_existent():
    sc = SharedContext()
    assert "non_existent_key" not in sc
    assert sc.get("non_existent_key") is None
    sentinel = object()
    assert sc.get("non_existent_key", sentinel) is sentinel


def test_set_overwrites():
    sc = SharedContext()
    sc.set("k", 1)
    sc.set("k", 2)
    assert sc.get("k") == 2


def test_concurrent_access():
    sc = SharedContext()
    num_threads = 50
    num_operations = 100

    def writer(ident):
        for j in range(num_operations):
            sc.set(f"key_{ident}_{j}", f"value_{ident}_{j}")

    def reader(ident):
        for j in range(num_operations):
            sc.get(f"key_{ident}_{j}")

    threads = [threading.Thread(target=writer, args=(i,)) for i in range(num_threads)]
    threads += [threading.Thread(target=reader, args=(i,)) for i in range(num_threads)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert "key_0_0" in sc
    assert sc.get("key_0_0") == "value_0_0"
    assert sc.get(f"key_{num_threads - 1}_{num_operations - 1}") == (
        f"value_{num_threads - 1}_{num_operations - 1}"
    )