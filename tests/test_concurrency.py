"""Concurrency Tests - catalog store under simultaneous readers and writers"""
import random
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from record_catalog_core.catalog import (
    CatalogOperations,
    CatalogStore,
    Record,
    RecordAlreadyExists,
)

pytestmark = pytest.mark.concurrency

WORKERS = 8


def assert_sorted_unique(records):
    ids = [r.id for r in records]
    assert ids == sorted(ids), "catalog must stay sorted by id"
    assert len(ids) == len(set(ids)), "catalog must not hold duplicate ids"


def test_concurrent_inserts_keep_catalog_sorted(store):
    rng = random.Random(1234)
    new_ids = [f"r{n:04d}" for n in range(400)]
    rng.shuffle(new_ids)

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        list(pool.map(lambda i: store.insert(Record(id=i, title=f"title {i}")), new_ids))

    records = store.snapshot()
    assert len(records) == 3 + len(new_ids)
    assert_sorted_unique(records)
    store.check_invariants()


def test_concurrent_duplicates_admit_one_winner(empty_store):
    catalog = CatalogOperations(empty_store)
    barrier = threading.Barrier(WORKERS)

    def attempt(n):
        barrier.wait()
        try:
            catalog.add_record(Record(id="same", title=f"attempt {n}"))
            return True
        except RecordAlreadyExists:
            return False

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        outcomes = list(pool.map(attempt, range(WORKERS)))

    assert outcomes.count(True) == 1
    assert len(empty_store) == 1


def test_overlapping_ids_from_many_threads(store):
    """Every id is inserted by several threads; each lands exactly once"""
    candidate_ids = [str(n) for n in range(50)]
    successes = []
    lock = threading.Lock()

    def worker(seed):
        rng = random.Random(seed)
        ids = candidate_ids[:]
        rng.shuffle(ids)
        for record_id in ids:
            try:
                store.insert(Record(id=record_id))
            except RecordAlreadyExists:
                continue
            with lock:
                successes.append(record_id)

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        list(pool.map(worker, range(WORKERS)))

    # "1", "2", "3" were seeded so only the other 47 can succeed
    assert sorted(successes) == sorted(set(candidate_ids) - {"1", "2", "3"})
    assert len(store) == len(candidate_ids)
    assert_sorted_unique(store.snapshot())


def test_readers_never_see_partial_state(store):
    """Snapshots taken during inserts are always sorted, unique and only grow"""
    stop = threading.Event()
    failures = []

    def reader():
        last_len = 0
        while not stop.is_set():
            snapshot = store.snapshot()
            ids = [r.id for r in snapshot]
            if ids != sorted(ids) or len(ids) != len(set(ids)):
                failures.append(ids)
            if len(snapshot) < last_len:
                failures.append(f"shrank from {last_len} to {len(snapshot)}")
            last_len = len(snapshot)

    def writer(offset):
        for n in range(offset, 300, 4):
            store.insert(Record(id=f"w{n:03d}"))

    readers = [threading.Thread(target=reader) for _ in range(4)]
    for t in readers:
        t.start()
    try:
        with ThreadPoolExecutor(max_workers=4) as pool:
            list(pool.map(writer, range(4)))
    finally:
        stop.set()
        for t in readers:
            t.join(5)

    assert failures == []
    assert len(store) == 303


def test_insert_visible_to_reads_that_start_after_it():
    store = CatalogStore(seed=())
    inserted = threading.Event()
    seen = []

    def writer():
        store.insert(Record(id="late"))
        inserted.set()

    def reader():
        inserted.wait(5)
        seen.append(store.get("late"))

    threads = [threading.Thread(target=reader), threading.Thread(target=writer)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(5)

    assert seen == [Record(id="late")]
