"""Tests for per-key locking."""

import threading
import time

import pytest

from storage_api.locking import KeyedLock


def test_same_key_is_serialized():
    locks = KeyedLock()
    counter = {"value": 0}

    def increment():
        with locks.hold("question-1"):
            current = counter["value"]
            time.sleep(0.001)
            counter["value"] = current + 1

    threads = [threading.Thread(target=increment) for _ in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert counter["value"] == 20


def test_different_keys_do_not_block_each_other():
    locks = KeyedLock()
    holding = threading.Event()
    release = threading.Event()

    def hold_a():
        with locks.hold("a"):
            holding.set()
            release.wait(timeout=5)

    t = threading.Thread(target=hold_a)
    t.start()
    assert holding.wait(timeout=5)

    acquired = threading.Event()

    def hold_b():
        with locks.hold("b"):
            acquired.set()

    t2 = threading.Thread(target=hold_b)
    t2.start()
    assert acquired.wait(timeout=2)

    release.set()
    t.join()
    t2.join()


def test_registry_is_emptied_after_use():
    locks = KeyedLock()
    with locks.hold("x"):
        assert locks.active_keys() == 1
    assert locks.active_keys() == 0


def test_lock_released_when_block_raises():
    locks = KeyedLock()
    with pytest.raises(ValueError):
        with locks.hold("x"):
            raise ValueError("boom")

    with locks.hold("x"):
        pass
    assert locks.active_keys() == 0
