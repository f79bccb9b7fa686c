# gamematch/__init__.py
import os
import logging

from flask import Flask, jsonify
from flask_cors import CORS
from flask_migrate import Migrate
from flask_jwt_extended import JWTManager

from gamematch.config import Config
from gamematch.extension.extensions import db

jwt = JWTManager()  # global instance


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))
    app.logger.setLevel(os.getenv("LOG_LEVEL", "INFO"))

    # Extensions
    jwt.init_app(app)
    CORS(app, supports_credentials=True)
    db.init_app(app)
    Migrate(app, db)

    # Import blueprints AFTER extensions are inited to avoid premature current_app usage
    from gamematch.controllers.auth_controller import bp_auth
    from gamematch.controllers.catalog_controller import bp_catalog
    from gamematch.controllers.match_controller import bp_match
    from gamematch.controllers.profile_controller import bp_profile
    from gamematch.controllers.admin_games_controller import bp_admin_games
    from gamematch.controllers.admin_catalog_controller import bp_admin_catalog
    from gamematch.commands import register_commands

    app.register_blueprint(bp_auth)
    app.register_blueprint(bp_catalog)
    app.register_blueprint(bp_match)
    app.register_blueprint(bp_profile)
    app.register_blueprint(bp_admin_games)
    app.register_blueprint(bp_admin_catalog)

    register_commands(app)

    @jwt.unauthorized_loader
    def _missing_token(reason):
        return jsonify({"error": "Unauthorized", "message": reason}), 401

    @jwt.invalid_token_loader
    def _invalid_token(reason):
        return jsonify({"error": "Invalid token", "message": reason}), 401

    @jwt.expired_token_loader
    def _expired_token(jwt_header, jwt_payload):
        return jsonify({"error": "Token expired"}), 401

    return app
