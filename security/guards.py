import hashlib
import hmac
from functools import wraps
from http import HTTPStatus

from flask import current_app, request

from common.utils.logging_service import logger
from common.utils.utils import json_abort

unauthorized_error = {"message": "Requires authentication"}

basic_auth_challenge = {"WWW-Authenticate": 'Basic realm="restricted", charset="UTF-8"'}


def __credentials_digest(username: str, password: str) -> bytes:
    return hashlib.sha256((username + password).encode("utf-8")).digest()


def __expected_digest():
    username = current_app.config.get("BASIC_AUTH_USERNAME")
    password = current_app.config.get("BASIC_AUTH_PASSWORD")

    if not username or not password:
        return None

    return __credentials_digest(username, password)


def __log_request():
    logger.info(f"method {request.method} path {request.path}")


def request_logger(function):
    @wraps(function)
    def decorator(*args, **kwargs):
        __log_request()
        return function(*args, **kwargs)

    return decorator


def basic_auth_guard(function):
    @wraps(function)
    def decorator(*args, **kwargs):
        __log_request()

        auth = request.authorization
        expected = __expected_digest()

        if (
            auth is not None
            and auth.type == "basic"
            and expected is not None
            and hmac.compare_digest(
                __credentials_digest(auth.username or "", auth.password or ""),
                expected,
            )
        ):
            return function(*args, **kwargs)

        logger.warning("Unauthorized")
        json_abort(HTTPStatus.UNAUTHORIZED, unauthorized_error, basic_auth_challenge)

    return decorator
