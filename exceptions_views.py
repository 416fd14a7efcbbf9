from http import HTTPStatus

import marshmallow
from flask import Blueprint, jsonify

from common.utils.exceptions import DatabaseConnectionError, QueryError, ValidationError
from common.utils.logging_service import logger

bp = Blueprint("exceptions", __name__)


@bp.app_errorhandler(ValidationError)
def handle_validation_error(e: ValidationError):
    logger.warning(f"Rejected request: {e}")
    return jsonify({"error": str(e)}), HTTPStatus.BAD_REQUEST


@bp.app_errorhandler(marshmallow.ValidationError)
def handle_invalid_body(e: marshmallow.ValidationError):
    logger.warning(f"Invalid request body: {e.messages}")
    return (
        jsonify({"error": "Invalid request body", "fields": e.messages}),
        HTTPStatus.BAD_REQUEST,
    )


@bp.app_errorhandler(QueryError)
def handle_query_error(e: QueryError):
    logger.error(f"{e} (cause: {e.__cause__})")
    return jsonify({"error": str(e)}), HTTPStatus.INTERNAL_SERVER_ERROR


@bp.app_errorhandler(DatabaseConnectionError)
def handle_connection_error(e: DatabaseConnectionError):
    logger.error(f"Database unavailable: {e}")
    return jsonify({"error": "Database unavailable"}), HTTPStatus.SERVICE_UNAVAILABLE
