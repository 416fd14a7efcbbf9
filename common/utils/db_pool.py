import math
from contextlib import contextmanager
from typing import Optional

import psycopg
from flask import current_app
from psycopg.conninfo import make_conninfo
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool, PoolTimeout

from common.utils.exceptions import DatabaseConnectionError
from common.utils.logging_service import logger
from common.utils.utils import DB_CONFIG, POOL_CONFIG, STATEMENT_TIMEOUT_MS


def reset_statement_timeout(conn):
    # back to the session default taken from the connection options
    conn.execute("RESET statement_timeout")


def deadline_timeout_ms(remaining: float, cap_ms: Optional[int] = None) -> int:
    """Statement timeout for the time left on a deadline, capped by the configured one."""
    cap_ms = STATEMENT_TIMEOUT_MS if cap_ms is None else cap_ms
    # 0 would disable the timeout altogether
    timeout_ms = max(math.ceil(remaining * 1000), 1)
    return min(timeout_ms, cap_ms) if cap_ms else timeout_ms


def build_conninfo(db_config=None, statement_timeout_ms: int = STATEMENT_TIMEOUT_MS):
    params = {k: v for k, v in (db_config or DB_CONFIG).items() if v is not None}
    if statement_timeout_ms:
        params["options"] = f"-c statement_timeout={statement_timeout_ms}"
    return make_conninfo(**params)


class DatabasePool:
    """The process-wide pool of backend connections.

    Connections are handed out in autocommit mode: every statement is committed
    as soon as it runs, so a multi-step storage operation that fails halfway
    leaves its earlier steps in place.
    """

    def __init__(
        self,
        conninfo: str,
        min_size: int = POOL_CONFIG["min_size"],
        max_size: int = POOL_CONFIG["max_size"],
        timeout: float = POOL_CONFIG["timeout"],
    ):
        self.timeout = timeout
        self._pool = ConnectionPool(
            conninfo,
            min_size=min_size,
            max_size=max_size,
            timeout=timeout,
            kwargs={"autocommit": True, "row_factory": dict_row},
            open=False,
            reset=reset_statement_timeout,
            name="moviecatalog",
        )
        self._opened = False
        self._closed = False

    def open(self):
        if self._opened:
            raise DatabaseConnectionError("connection pool already opened")
        try:
            self._pool.open(wait=True, timeout=self.timeout)
        except (PoolTimeout, psycopg.Error) as e:
            logger.error(f"Unable to create connection pool: {e}")
            raise DatabaseConnectionError(f"unable to create connection pool: {e}") from e
        self._opened = True
        logger.info("Connected to PostgreSQL")
        return self

    def close(self):
        if self._closed:
            logger.warning("Connection pool already closed")
            return
        self._closed = True
        self._pool.close()
        logger.info("Connection pool closed")

    def ping(self, timeout: Optional[float] = None):
        try:
            with self.connection(timeout=timeout) as conn:
                conn.execute("SELECT 1")
        except (PoolTimeout, psycopg.Error) as e:
            raise DatabaseConnectionError(f"database unreachable: {e}") from e

    @contextmanager
    def connection(self, timeout: Optional[float] = None):
        with self._pool.connection(timeout=timeout) as conn:
            yield conn


def open_db_pool(db_config=None) -> DatabasePool:
    return DatabasePool(build_conninfo(db_config)).open()


def get_db_pool():
    return current_app.extensions["db_pool"]


@contextmanager
def checkout(pool, deadline):
    """A pooled connection whose statements cannot outlive ``deadline``."""
    remaining = deadline.remaining()
    with pool.connection(timeout=remaining) as conn:
        if remaining is not None:
            conn.execute(
                "SELECT set_config('statement_timeout', %s, false);",
                (str(deadline_timeout_ms(remaining)),),
            )
        yield conn
