from functools import wraps
from flask import current_app, jsonify
from sqlalchemy.exc import SQLAlchemyError

from ..errors import ActionError, WriteFailure
from ..extensions import db


def action_boundary(view):
    """Run a company-side action and answer in the ``{"success": ...}`` shape.

    The view returns its payload (or ``(payload, status)``); any ActionError
    becomes ``{"success": False, "error", "code"}`` with the error's status.
    """
    @wraps(view)
    def wrapped(*args, **kwargs):
        try:
            out = view(*args, **kwargs)
        except ActionError as e:
            current_app.logger.info("%s rejected: %s (%s)", view.__name__, e.code, e.message)
            return jsonify(e.to_result()), e.status
        except SQLAlchemyError as e:
            db.session.rollback()
            current_app.logger.exception("%s failed: %s", view.__name__, e)
            err = WriteFailure()
            return jsonify(err.to_result()), err.status
        status = 200
        if isinstance(out, tuple):
            out, status = out
        return jsonify({"success": True, "data": out}), status
    return wrapped
