import atexit
import os
from apispec import APISpec
from flask_apispec import FlaskApiSpec
from flask_cors import CORS
from flask_talisman import Talisman
from flask import Flask
import logging
import sys

from common.utils.db_pool import open_db_pool
from common.utils.utils import REQUEST_TIMEOUT_SECONDS, env_flag
from common.utils.utils_views import bp as utils_bp
from movies.movies_views import bp as movies_bp
from actors.actors_views import bp as actors_bp
import movies.movies_views as movies_views
import actors.actors_views as actors_views
import exceptions_views
from apispec.ext.marshmallow import MarshmallowPlugin

logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],  # Log to stdout
)

logger = logging.getLogger(__name__)


def create_app(test_config=None, db_pool=None):
    """Builds the application around one database pool.

    When ``db_pool`` is not given the pool is opened from the environment and
    closed at interpreter exit.
    """
    app = Flask(__name__, instance_relative_config=True)

    app.config.update(
        {
            "APISPEC_SPEC": APISpec(
                title="Movie Catalog API",
                version="v1",
                plugins=[MarshmallowPlugin()],
                openapi_version="3.0.2",
            ),
            "APISPEC_SWAGGER_URL": "/swagger/",  # JSON
            "APISPEC_SWAGGER_UI_URL": "/swagger-ui/",  # UI
        }
    )

    app.config.update(
        BASIC_AUTH_USERNAME=os.getenv("BASIC_AUTH_USERNAME"),
        BASIC_AUTH_PASSWORD=os.getenv("BASIC_AUTH_PASSWORD"),
        REQUEST_TIMEOUT_SECONDS=REQUEST_TIMEOUT_SECONDS,
        FORCE_HTTPS=env_flag("FORCE_HTTPS", default=True),
    )

    if test_config is not None:
        app.config.update(test_config)

    csp = {"default-src": ["'self'"], "frame-ancestors": ["'none'"]}
    Talisman(
        app,
        force_https=app.config["FORCE_HTTPS"] and not app.config.get("TESTING"),
        frame_options="DENY",
        content_security_policy=csp,
        referrer_policy="no-referrer",
        x_content_type_options=True,
        strict_transport_security=True,
    )

    @app.after_request
    def add_no_cache(response):
        response.headers["Cache-Control"] = "no-store, max-age=0, must-revalidate"
        response.headers["Pragma"] = "no-cache"
        response.headers["Expires"] = "0"
        return response

    if db_pool is None:
        logger.info("Opening database pool")
        db_pool = open_db_pool()
        atexit.register(db_pool.close)
    app.extensions["db_pool"] = db_pool

    CORS(
        app,
        origins="*",
        methods=["GET", "POST", "DELETE", "PUT", "PATCH", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.register_blueprint(movies_bp)
    app.register_blueprint(actors_bp)
    app.register_blueprint(utils_bp)
    app.register_blueprint(exceptions_views.bp)

    app.logger.handlers = logging.getLogger().handlers
    app.logger.setLevel(logging.DEBUG)

    docs = FlaskApiSpec(app)
    docs.register(movies_views.show_all_movies, blueprint="movies")
    docs.register(movies_views.search_movies, blueprint="movies")
    docs.register(movies_views.create_movie, blueprint="movies")
    docs.register(movies_views.update_movie, blueprint="movies")
    docs.register(movies_views.delete_movie, blueprint="movies")
    docs.register(actors_views.show_all_actors, blueprint="actors")
    docs.register(actors_views.create_actor, blueprint="actors")
    docs.register(actors_views.update_actor, blueprint="actors")
    docs.register(actors_views.delete_actor, blueprint="actors")

    return app


if __name__ == "__main__":
    create_app().run(debug=True)
