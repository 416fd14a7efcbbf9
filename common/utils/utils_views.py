from flask import Blueprint, jsonify

from common.utils.db_pool import get_db_pool
from common.utils.exceptions import DatabaseConnectionError
from common.utils.logging_service import logger


bp_name = "utils"
bp_url_prefix = "/api/v1.0"
bp = Blueprint(bp_name, __name__, url_prefix=bp_url_prefix)


def check_database():
    try:
        get_db_pool().ping(timeout=5)
        return True
    except DatabaseConnectionError as e:
        logger.warning(f"Health check failed: {e}")
        return False


@bp.route("/health", methods=["GET"])
def health_check():
    db_status = check_database()

    return jsonify(
        {
            "database": "up" if db_status else "down",
        }
    ), (200 if db_status else 503)
