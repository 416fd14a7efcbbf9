import psutil, os
import time
from typing import Dict
from flask import jsonify, abort
from functools import wraps
from common.utils.logging_service import logger
from dotenv import load_dotenv

load_dotenv()

DB_CONFIG: Dict[str, str] = {
    "dbname": os.getenv("POSTGRES_DB", "movies"),
    "user": os.getenv("POSTGRES_USER"),
    "password": os.getenv("POSTGRES_PASSWORD"),
    "host": os.getenv("POSTGRES_HOST"),
    "port": os.getenv("POSTGRES_PORT", "5432"),
}

POOL_CONFIG = {
    "min_size": int(os.getenv("DB_POOL_MIN_SIZE", "1")),
    "max_size": int(os.getenv("DB_POOL_MAX_SIZE", "10")),
    "timeout": float(os.getenv("DB_POOL_TIMEOUT", "30")),
}

STATEMENT_TIMEOUT_MS = int(os.getenv("DB_STATEMENT_TIMEOUT_MS", "5000"))
REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "10"))


def env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def json_abort(status_code, data=None, headers=None):
    response = jsonify(data)
    response.status_code = status_code
    if headers:
        response.headers.update(headers)
    abort(response)


def time_it(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        logger.info(f"Starting {func.__name__}")
        start_time = time.time()
        result = func(*args, **kwargs)
        end_time = time.time()
        elapsed_time = end_time - start_time
        logger.info(f"{func.__name__} completed in {elapsed_time:.2f}s")
        logger.debug(
            f"Memory usage: {psutil.Process(os.getpid()).memory_info().rss / 1024**2:.2f} MB"
        )

        return result

    return wrapper
