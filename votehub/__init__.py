from flask import Flask, jsonify
from sqlalchemy.exc import SQLAlchemyError

from votehub.config import Config
from votehub.extensions import db, login_manager, migrate
from votehub.models import Candidate
from votehub.routes import register_routes


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_candidate(candidate_id):
        return db.session.get(Candidate, int(candidate_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({"message": "Not logged in"}), 401

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error):
        db.session.rollback()
        app.logger.exception("Database error: %s", error)
        return jsonify({"message": "Internal server error"}), 500

    register_routes(app)
    return app


__all__ = ["create_app", "db", "migrate"]
