from flask import Flask, jsonify
from flask_migrate import Migrate
from .extensions import db, login_manager

migrate = Migrate()


def create_app(config_object="config.Config"):
    """Application factory.

    Tests pass ``"config.TestConfig"`` to get an in-memory database.
    """
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        from .models.company import CompanyUser
        return db.session.get(CompanyUser, int(user_id))

    from .blueprints.auth import bp as auth_bp
    app.register_blueprint(auth_bp, url_prefix="/auth")

    from .blueprints.search import bp as search_bp
    app.register_blueprint(search_bp, url_prefix="/search")

    from .blueprints.candidates import bp as candidates_bp
    app.register_blueprint(candidates_bp, url_prefix="/candidates")

    from .errors import ActionError

    @app.errorhandler(ActionError)
    def handle_action_error(e):
        # raised outside an action_boundary (e.g. from a before_request hook)
        return jsonify(e.to_result()), e.status

    @app.get("/healthz")
    def healthz():
        return jsonify({"status": "ok"})

    return app
