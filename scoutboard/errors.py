"""Error taxonomy for company-side actions.

Every store or permission failure raised by a service is one of these. The
``action_boundary`` decorator turns them into the ``{"success": False, ...}``
result shape, so nothing escapes a blueprint as a bare exception.
"""


class ActionError(Exception):
    code = "API_000"
    status = 500
    default_message = "処理に失敗しました。もう一度お試しください"

    def __init__(self, message=None, **extra):
        self.message = message or self.default_message
        self.extra = extra
        super().__init__(self.message)

    def to_result(self) -> dict:
        out = {"success": False, "error": self.message, "code": self.code}
        out.update(self.extra)
        return out


class AuthRequired(ActionError):
    code = "AUTH_REQUIRED"
    status = 401
    default_message = "認証が必要です"


class NotFound(ActionError):
    code = "NOT_FOUND"
    status = 404
    default_message = "対象が見つかりません"


class AlreadyExists(ActionError):
    code = "ALREADY_EXISTS"
    status = 409
    default_message = "既に登録されています"


class ValidationError(ActionError):
    code = "VALIDATION_ERROR"
    status = 400
    default_message = "入力内容に誤りがあります"

    def __init__(self, message=None, field=None, **extra):
        if field:
            extra["field"] = field
        self.field = field
        super().__init__(message, **extra)


class InvalidTransition(ValidationError):
    """A selection stage was advanced out of order or after it was resolved."""
    code = "INVALID_TRANSITION"


class WriteFailure(ActionError):
    code = "WRITE_FAILURE"
    status = 500
    default_message = "更新に失敗しました。もう一度お試しください"
