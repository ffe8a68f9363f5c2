from flask import current_app
from flask_login import login_user, logout_user, login_required, current_user
from . import bp
from .forms import LoginForm
from ...errors import AuthRequired
from ...models.company import CompanyUser
from ...utils.decorators import action_boundary
from ...utils.forms import validate_or_raise


def _user_dict(user):
    return {
        "id": user.id,
        "email": user.email,
        "full_name": user.full_name,
        "groups": [
            {
                "id": p.company_group_id,
                "group_name": p.group.group_name if p.group else "",
                "company_name": p.group.company_name if p.group else "",
                "permission_level": p.permission_level,
            }
            for p in user.permissions
        ],
    }


@bp.post("/login")
@action_boundary
def login():
    form = validate_or_raise(LoginForm)
    user = CompanyUser.query.filter_by(email=form.email.data.strip().lower()).first()
    if user is None or not user.check_password(form.password.data):
        current_app.logger.info("login failed for %s", form.email.data)
        raise AuthRequired("メールアドレスまたはパスワードが正しくありません")
    login_user(user)
    return _user_dict(user)


@bp.post("/logout")
@login_required
@action_boundary
def logout():
    logout_user()
    return None


@bp.get("/me")
@login_required
@action_boundary
def me():
    return _user_dict(current_user)
