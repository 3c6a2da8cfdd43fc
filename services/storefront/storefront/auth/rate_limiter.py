"""
Login attempt limiter keyed by client IP.

Each client gets a fixed window that starts at its first attempt. The table
is bounded: expired windows are swept once it fills up, and if it is still
full the oldest entry is dropped.
"""
import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable

from fastapi import Request

from storefront.config import settings

logger = logging.getLogger(__name__)


@dataclass
class AttemptRecord:
    attempts: int
    window_start: float


class LoginRateLimiter:
    def __init__(
        self,
        max_attempts: int = 5,
        window_seconds: float = 15 * 60,
        max_clients: int = 10000,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self.max_clients = max_clients
        self._clock = clock
        self._records: "OrderedDict[str, AttemptRecord]" = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._records)

    def check(self, client_ip: str) -> bool:
        """Register an attempt; False means the client is over its limit"""
        now = self._clock()
        with self._lock:
            record = self._records.get(client_ip)

            if record is None or now - record.window_start > self.window_seconds:
                if record is None:
                    self._make_room(now)
                else:
                    del self._records[client_ip]
                self._records[client_ip] = AttemptRecord(attempts=1, window_start=now)
                return True

            if record.attempts >= self.max_attempts:
                return False

            record.attempts += 1
            return True

    def reset(self, client_ip: str) -> None:
        with self._lock:
            self._records.pop(client_ip, None)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def _make_room(self, now: float) -> None:
        if len(self._records) < self.max_clients:
            return

        expired = [
            ip for ip, record in self._records.items()
            if now - record.window_start > self.window_seconds
        ]
        for ip in expired:
            del self._records[ip]

        # Insertion order == window start order, so the head is the oldest
        while len(self._records) >= self.max_clients:
            evicted_ip, _ = self._records.popitem(last=False)
            logger.debug(f"Login limiter full, evicted {evicted_ip}")


def get_client_ip(request: Request) -> str:
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        first = forwarded_for.split(",")[0].strip()
        if first:
            return first

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip

    if request.client and request.client.host:
        return request.client.host
    return "unknown"


login_rate_limiter = LoginRateLimiter(
    max_attempts=settings.login_max_attempts,
    window_seconds=settings.login_window_seconds,
    max_clients=settings.login_max_tracked_clients,
)


def get_login_rate_limiter() -> LoginRateLimiter:
    """Dependency returning the process-wide limiter"""
    return login_rate_limiter
