"""
Tests for per-category version keys.
"""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from webooks.versioning import DEFAULT_CATEGORIES, INITIAL_TOKEN, VersionKeyStore


class TestBasics:
    def test_unbumped_category_has_initial_token(self, versions):
        assert versions.get("bookmarks") == INITIAL_TOKEN
        assert versions.get("never-heard-of-it") == INITIAL_TOKEN

    def test_get_all_lists_default_categories(self, versions):
        snapshot = versions.get_all()
        assert set(snapshot) == set(DEFAULT_CATEGORIES)
        assert all(token == INITIAL_TOKEN for token in snapshot.values())

    def test_bump_advances_and_returns_new_token(self, versions):
        first = versions.bump("spaces")
        assert first > INITIAL_TOKEN
        assert versions.get("spaces") == first

        second = versions.bump("spaces")
        assert second > first
        assert versions.get("spaces") == second

    def test_bump_only_touches_its_category(self, versions):
        versions.bump("folders")
        assert versions.get("folders") != INITIAL_TOKEN
        assert versions.get("bookmarks") == INITIAL_TOKEN

    def test_new_categories_are_accepted(self, versions):
        token = versions.bump("tags")
        assert versions.get_all()["tags"] == token

    def test_empty_category_rejected(self, versions):
        with pytest.raises(ValueError):
            versions.bump("")

    def test_clock_going_backwards_still_advances(self):
        now = [1_000_000]
        store = VersionKeyStore(clock=lambda: now[0])
        first = store.bump("spaces")
        now[0] = 10
        second = store.bump("spaces")
        assert second > first

    def test_frozen_clock_still_advances(self):
        store = VersionKeyStore(clock=lambda: 42)
        tokens = [store.bump("spaces") for _ in range(5)]
        assert tokens == sorted(set(tokens))

    def test_isolated_instances(self):
        a = VersionKeyStore()
        b = VersionKeyStore()
        a.bump("spaces")
        assert b.get("spaces") == INITIAL_TOKEN

    def test_reset(self, versions):
        versions.bump("spaces")
        versions.reset()
        assert versions.get("spaces") == INITIAL_TOKEN

    def test_tokens_are_opaque_fixed_width_strings(self, versions):
        token = versions.bump("spaces")
        assert isinstance(token, str)
        assert len(token) == len(INITIAL_TOKEN)


class TestConcurrency:
    def test_concurrent_bumps_are_all_distinct(self, versions):
        with ThreadPoolExecutor(max_workers=16) as pool:
            tokens = list(pool.map(lambda _: versions.bump("bookmarks"), range(100)))

        assert len(set(tokens)) == 100
        assert versions.get("bookmarks") == max(tokens)

    def test_frozen_clock_concurrent_bumps_do_not_collapse(self):
        store = VersionKeyStore(clock=lambda: 0)
        with ThreadPoolExecutor(max_workers=16) as pool:
            tokens = list(pool.map(lambda _: store.bump("bookmarks"), range(100)))

        # Every bump advanced the counter by exactly one
        assert sorted(int(t) for t in tokens) == list(range(1, 101))

    def test_polling_reader_never_sees_regression(self, versions):
        observed = []
        done = threading.Event()

        def reader():
            while not done.is_set():
                token = versions.get("bookmarks")
                if not observed or observed[-1] != token:
                    observed.append(token)
            observed.append(versions.get("bookmarks"))

        reader_thread = threading.Thread(target=reader)
        reader_thread.start()
        try:
            with ThreadPoolExecutor(max_workers=16) as pool:
                tokens = list(pool.map(lambda _: versions.bump("bookmarks"), range(100)))
        finally:
            done.set()
            reader_thread.join()

        assert len(set(tokens)) == 100
        changes = [t for i, t in enumerate(observed) if i == 0 or t != observed[i - 1]]
        assert changes == sorted(changes)
        assert len(changes) == len(set(changes))
        assert observed[-1] == max(tokens)

    def test_reset_keeps_entries_shared_with_bumpers(self, versions):
        entry = versions._entry("spaces")
        versions.reset()
        versions.bump("spaces")
        assert entry.value > 0
        assert versions.get("spaces") == versions._format(entry.value)

    def test_snapshot_reader_per_category_monotonic(self, versions):
        snapshots = []
        done = threading.Event()

        def reader():
            while not done.is_set():
                snapshots.append(versions.get_all())

        reader_thread = threading.Thread(target=reader)
        reader_thread.start()
        try:
            with ThreadPoolExecutor(max_workers=8) as pool:
                list(pool.map(
                    lambda i: versions.bump(("spaces", "folders", "bookmarks")[i % 3]),
                    range(90),
                ))
        finally:
            done.set()
            reader_thread.join()

        for category in ("spaces", "folders", "bookmarks"):
            seen = [snapshot[category] for snapshot in snapshots]
            assert seen == sorted(seen)
