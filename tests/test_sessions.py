"""
Tests for the in-memory admin session store.
"""
import threading

import pytest

from intake.services.sessions import SessionStore

TTL = 3600


class FakeClock:
    def __init__(self, now=1_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return SessionStore(ttl=TTL, clock=clock)


class TestCreate:

    def test_new_token_is_valid(self, store):
        token = store.create()
        assert store.is_valid(token)

    def test_tokens_are_long_and_unique(self, store):
        tokens = {store.create() for _ in range(100)}
        assert len(tokens) == 100
        # 24 random bytes, hex encoded
        assert all(len(t) == 48 for t in tokens)

    def test_expiry_is_one_ttl_from_now(self, store, clock):
        token = store.create()
        session = store.get(token)
        assert session.created_at == clock.now
        assert session.expires_at == clock.now + TTL


class TestValidity:

    @pytest.mark.parametrize('token', [None, '', 'not-a-token'])
    def test_unknown_tokens_are_invalid(self, store, token):
        assert store.is_valid(token) is False

    def test_valid_until_just_before_expiry(self, store, clock):
        token = store.create()
        clock.advance(TTL - 1)
        assert store.is_valid(token)

    def test_expired_token_is_evicted(self, store, clock):
        token = store.create()
        clock.advance(TTL + 1)
        assert store.is_valid(token) is False
        assert store.get(token) is None
        assert len(store) == 0

    def test_expiry_boundary_is_exclusive(self, store, clock):
        token = store.create()
        clock.advance(TTL)
        assert store.is_valid(token) is False


class TestTouch:

    def test_touch_slides_the_window(self, store, clock):
        token = store.create()
        start = clock.now
        clock.advance(1800)
        assert store.touch(token)

        clock.now = start + TTL + 1
        assert store.is_valid(token)
        clock.now = start + 5400 - 1
        assert store.is_valid(token)
        clock.now = start + 5400
        assert store.is_valid(token) is False

    def test_touch_does_not_revive_expired_token(self, store, clock):
        token = store.create()
        clock.advance(TTL + 1)
        assert store.touch(token) is False
        assert store.get(token) is None

    def test_touch_does_not_create_entries(self, store):
        assert store.touch('made-up') is False
        assert len(store) == 0


class TestRevoke:

    def test_revoke_is_idempotent(self, store):
        token = store.create()
        for _ in range(3):
            store.revoke(token)
            assert store.is_valid(token) is False

    def test_revoke_unknown_token_is_not_an_error(self, store):
        store.revoke(None)
        store.revoke('')
        store.revoke('never-issued')

    def test_clear_invalidates_everything(self, store):
        tokens = [store.create() for _ in range(5)]
        store.clear()
        assert not any(store.is_valid(t) for t in tokens)
        assert len(store) == 0

    def test_revoke_only_affects_its_token(self, store):
        keep = store.create()
        drop = store.create()
        store.revoke(drop)
        assert store.is_valid(keep)


class TestConcurrency:

    def test_touch_racing_revoke_always_ends_revoked(self, store):
        for _ in range(200):
            token = store.create()
            barrier = threading.Barrier(2)

            def toucher():
                barrier.wait()
                store.touch(token)

            def revoker():
                barrier.wait()
                store.revoke(token)

            threads = [threading.Thread(target=toucher), threading.Thread(target=revoker)]
            for t in threads:
                t.start()
            for t in threads:
                t.join()

            assert store.is_valid(token) is False
        assert len(store) == 0

    def test_parallel_creates_are_all_recorded(self, store):
        tokens = []
        lock = threading.Lock()

        def worker():
            for _ in range(50):
                token = store.create()
                with lock:
                    tokens.append(token)

        threads = [threading.Thread(target=worker) for _ in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(store) == 250
        assert all(store.is_valid(t) for t in tokens)


def test_init_app_reads_ttl(app):
    store = SessionStore()
    app.config['ADMIN_SESSION_TTL'] = 120
    store.init_app(app)
    assert store.ttl == 120
