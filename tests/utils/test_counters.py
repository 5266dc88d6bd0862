from concurrent.futures import ThreadPoolExecutor

from record_prep.utils.counters import AtomicCounter


def test_counter_is_exact_under_concurrent_increments():
    counter = AtomicCounter()

    def work(_: int) -> None:
        for _ in range(1000):
            counter.add()

    with ThreadPoolExecutor(max_workers=8) as executor:
        list(executor.map(work, range(16)))

    assert counter.get() == 16_000


def test_add_returns_new_value():
    counter = AtomicCounter()
    assert counter.add(3) == 3
    assert counter.add() == 4
