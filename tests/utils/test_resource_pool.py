"""Tests for the generic resource pool."""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from record_prep.utils.pool import ResourcePool


def test_acquire_creates_when_empty_and_reuses_after_release():
    pool: ResourcePool[list[int]] = ResourcePool(list)

    first = pool.acquire()
    pool.release(first)
    second = pool.acquire()

    assert second is first
    assert pool.created == 1


def test_hooks_run_on_acquire_and_release():
    events: list[str] = []
    pool: ResourcePool[list[int]] = ResourcePool(
        list,
        prepare=lambda item: events.append("prepare"),
        reset=lambda item: item.clear(),
    )

    item = pool.acquire()
    item.append(1)
    pool.release(item)

    assert item == []
    assert pool.acquire() is item
    assert events == ["prepare", "prepare"]


def test_max_idle_drops_surplus_instances():
    pool: ResourcePool[object] = ResourcePool(object, max_idle=1)
    items = [pool.acquire() for _ in range(3)]

    for item in items:
        pool.release(item)

    assert pool.idle_count == 1


def test_negative_max_idle_is_rejected():
    with pytest.raises(ValueError):
        ResourcePool(object, max_idle=-1)


def test_lease_releases_on_exception():
    pool: ResourcePool[object] = ResourcePool(object)

    with pytest.raises(RuntimeError):
        with pool.lease():
            raise RuntimeError("boom")

    assert pool.idle_count == 1


def test_concurrent_leases_are_exclusive():
    pool: ResourcePool[dict[str, int]] = ResourcePool(dict)
    holders: set[int] = set()
    guard = threading.Lock()
    overlaps: list[int] = []

    def work(_: int) -> None:
        with pool.lease() as item:
            with guard:
                if id(item) in holders:
                    overlaps.append(id(item))
                holders.add(id(item))
            item["uses"] = item.get("uses", 0) + 1
            with guard:
                holders.discard(id(item))

    with ThreadPoolExecutor(max_workers=8) as executor:
        list(executor.map(work, range(500)))

    assert overlaps == []
    assert pool.created <= 8
