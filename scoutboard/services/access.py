from ..errors import AuthRequired, NotFound


def require_group_access(user, company_group_id):
    """Raise unless ``user`` holds a permission row for the group.

    A group the user cannot see is reported as missing rather than forbidden.
    """
    if user is None or not getattr(user, "is_authenticated", False):
        raise AuthRequired()
    try:
        company_group_id = int(company_group_id)
    except (TypeError, ValueError):
        raise NotFound("グループが見つかりません")
    if not user.can_access(company_group_id):
        raise NotFound("グループが見つかりません")
    return company_group_id
