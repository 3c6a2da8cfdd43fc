import pytest
from starlette.requests import Request

from storefront.auth.rate_limiter import LoginRateLimiter, get_client_ip


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


def test_allows_up_to_max_attempts_in_window(clock):
    limiter = LoginRateLimiter(max_attempts=3, window_seconds=60, clock=clock)

    assert [limiter.check("1.1.1.1") for _ in range(4)] == [True, True, True, False]


def test_window_expiry_starts_fresh(clock):
    limiter = LoginRateLimiter(max_attempts=2, window_seconds=60, clock=clock)
    limiter.check("1.1.1.1")
    limiter.check("1.1.1.1")
    assert limiter.check("1.1.1.1") is False

    clock.advance(61)

    assert limiter.check("1.1.1.1") is True
    assert limiter.check("1.1.1.1") is True
    assert limiter.check("1.1.1.1") is False


def test_clients_are_tracked_independently(clock):
    limiter = LoginRateLimiter(max_attempts=1, window_seconds=60, clock=clock)

    assert limiter.check("a") is True
    assert limiter.check("a") is False
    assert limiter.check("b") is True


def test_reset_forgets_client(clock):
    limiter = LoginRateLimiter(max_attempts=1, window_seconds=60, clock=clock)
    limiter.check("a")
    limiter.reset("a")

    assert limiter.check("a") is True


def test_full_table_evicts_oldest_client(clock):
    limiter = LoginRateLimiter(max_attempts=1, window_seconds=60, max_clients=2, clock=clock)
    limiter.check("oldest")
    clock.advance(1)
    limiter.check("newer")
    clock.advance(1)

    limiter.check("newest")

    assert len(limiter) == 2
    # "oldest" was dropped, so it gets a fresh window; "newer" is still blocked
    assert limiter.check("newer") is False
    assert limiter.check("oldest") is True


def test_full_table_sweeps_expired_before_evicting(clock):
    limiter = LoginRateLimiter(max_attempts=1, window_seconds=10, max_clients=3, clock=clock)
    limiter.check("stale-1")
    limiter.check("stale-2")
    clock.advance(5)
    limiter.check("live")
    clock.advance(6)

    limiter.check("new")

    assert len(limiter) == 2
    assert limiter.check("live") is False


def _request(headers=None, client=("10.1.2.3", 5000)):
    scope = {
        "type": "http",
        "method": "POST",
        "path": "/api/admin/login",
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
        "client": client,
    }
    return Request(scope)


def test_client_ip_prefers_first_forwarded_for():
    request = _request({"X-Forwarded-For": " 203.0.113.5 , 10.0.0.1", "X-Real-IP": "198.51.100.1"})

    assert get_client_ip(request) == "203.0.113.5"


def test_client_ip_falls_back_to_real_ip_then_peer():
    assert get_client_ip(_request({"X-Real-IP": "198.51.100.1"})) == "198.51.100.1"
    assert get_client_ip(_request()) == "10.1.2.3"
    assert get_client_ip(_request(client=None)) == "unknown"
