import os
import sys

# Ensure the 'backend' directory is on sys.path so imports work from repo root
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from lawdesk.core import rate_limit as rate_limit_mod
from lawdesk.core.rate_limit import InMemoryRateLimiter


def test_allows_up_to_limit_then_blocks(monkeypatch):
    now = [1000.0]
    monkeypatch.setattr(rate_limit_mod.time, "monotonic", lambda: now[0])

    limiter = InMemoryRateLimiter()
    for _ in range(3):
        allowed, retry_after = limiter.allow("auth:1.2.3.4", 3, 60)
        assert allowed is True
        assert retry_after == 0

    allowed, retry_after = limiter.allow("auth:1.2.3.4", 3, 60)
    assert allowed is False
    assert retry_after == 60

    # Keys are independent
    assert limiter.allow("auth:5.6.7.8", 3, 60)[0] is True


def test_window_slides(monkeypatch):
    now = [0.0]
    monkeypatch.setattr(rate_limit_mod.time, "monotonic", lambda: now[0])

    limiter = InMemoryRateLimiter()
    assert limiter.allow("k", 2, 10)[0] is True
    now[0] = 5.0
    assert limiter.allow("k", 2, 10)[0] is True
    now[0] = 8.0
    allowed, retry_after = limiter.allow("k", 2, 10)
    assert allowed is False
    assert retry_after == 2

    # First hit has left the window
    now[0] = 10.5
    assert limiter.allow("k", 2, 10)[0] is True


def test_reset_clears_all_keys(monkeypatch):
    limiter = InMemoryRateLimiter()
    assert limiter.allow("k", 1, 60)[0] is True
    assert limiter.allow("k", 1, 60)[0] is False
    limiter.reset()
    assert limiter.allow("k", 1, 60)[0] is True


def test_idle_keys_are_evicted(monkeypatch):
    now = [100.0]
    monkeypatch.setattr(rate_limit_mod.time, "monotonic", lambda: now[0])

    limiter = InMemoryRateLimiter()
    limiter.allow("auth:10.0.0.1", 5, 60)
    limiter.allow("auth:10.0.0.2", 5, 60)
    assert len(limiter) == 2

    # Both clients went quiet for longer than the window
    now[0] = 200.0
    assert limiter.allow("auth:10.0.0.3", 5, 60)[0] is True
    assert len(limiter) == 1
