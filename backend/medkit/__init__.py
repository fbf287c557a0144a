# backend/medkit/__init__.py
import sys

from flask import Flask, request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from .config import Config
from .extensions import db, migrate, jwt



def create_app(config_overrides: dict | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    # Import models so Alembic can discover metadata reliably
    from . import models  # noqa: F401

    # Register blueprints
    from .routes.system import system_bp
    from .routes.kits import kits_bp
    from .routes.auth import auth_bp
    from .routes.cod import cod_bp
    from .routes.returns import returns_bp

    app.register_blueprint(system_bp)
    app.register_blueprint(kits_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(cod_bp)
    app.register_blueprint(returns_bp)

    @app.after_request
    def add_cors_headers(response):
        origin = request.headers.get("Origin")
        allowed = {o.strip() for o in app.config["CORS_ORIGINS"].split(",") if o.strip()}
        if "*" in allowed:
            response.headers["Access-Control-Allow-Origin"] = "*"
        elif origin in allowed:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Vary"] = "Origin"
        else:
            return response
        response.headers["Access-Control-Allow-Headers"] = "Authorization, Content-Type"
        response.headers["Access-Control-Allow-Methods"] = "GET,POST,PUT,DELETE,OPTIONS"
        return response

    # Register CLI commands
    from .cli import register_commands
    register_commands(app)

    _initialize_database(app)

    return app


def _initialize_database(app: Flask) -> None:
    """
    Verify the data store is reachable and create the schema once.

    An unreachable store is fatal: the process exits with status 1.
    """
    with app.app_context():
        try:
            db.session.execute(text("SELECT 1"))
            if app.config["CREATE_SCHEMA_ON_STARTUP"]:
                db.create_all()
        except SQLAlchemyError:
            app.logger.exception("DB Connection Failed!")
            sys.exit(1)
        finally:
            db.session.remove()
    app.logger.info("DB Connected Successfully")
