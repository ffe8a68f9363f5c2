from flask import jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

db = SQLAlchemy()
login_manager = LoginManager()


@login_manager.unauthorized_handler
def _unauthorized():
    # API clients get the action result shape instead of a login redirect
    from .errors import AuthRequired
    err = AuthRequired()
    return jsonify(err.to_result()), err.status
