import time
from typing import Optional

from flask import current_app

from common.utils.exceptions import QueryError


class Deadline:
    """Point in time after which a storage operation must stop issuing queries.

    ``Deadline()`` never expires.
    """

    def __init__(self, seconds: Optional[float] = None):
        self.expires_at = None if seconds is None else time.monotonic() + seconds

    def remaining(self) -> Optional[float]:
        if self.expires_at is None:
            return None
        return max(self.expires_at - time.monotonic(), 0.0)

    def expired(self) -> bool:
        return self.expires_at is not None and time.monotonic() >= self.expires_at

    def check(self, operation: str):
        if self.expired():
            raise QueryError(operation, "deadline exceeded")


NO_DEADLINE = Deadline()


def request_deadline() -> Deadline:
    return Deadline(current_app.config.get("REQUEST_TIMEOUT_SECONDS"))
