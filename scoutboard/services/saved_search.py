"""Named saved searches and the plain search history, both in ``search_history``."""
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from ..errors import NotFound, ValidationError, WriteFailure
from ..extensions import db
from ..models.search_history import SearchHistory
from .access import require_group_access
from .criteria import SearchCriteria
from .relative_time import utcnow

MAX_NAME_LENGTH = 200


def _clean_name(name):
    name = (name or "").strip()
    if not name:
        raise ValidationError("保存する検索条件の名前を入力してください", field="name")
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(f"名前は{MAX_NAME_LENGTH}文字以内で入力してください", field="name")
    return name


def _commit(action):
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.exception("%s failed: %s", action, e)
        raise WriteFailure()


def _get_owned(search_id, user):
    row = db.session.get(SearchHistory, search_id)
    if row is None or user is None or not user.can_access(row.group_id):
        raise NotFound("保存された検索条件が見つかりません")
    return row


def _as_dict(criteria):
    if isinstance(criteria, SearchCriteria):
        return criteria.to_dict()
    return SearchCriteria.from_dict(criteria).to_dict()


def save_search(group_id, name, criteria, user):
    group_id = require_group_access(user, group_id)
    name = _clean_name(name)
    row = SearchHistory(
        group_id=group_id,
        searcher_id=user.id,
        search_title=name,
        search_conditions=_as_dict(criteria),
        is_saved=True,
        searched_at=utcnow(),
    )
    db.session.add(row)
    _commit("save search")
    current_app.logger.info("search %r saved for group %s by user %s", name, group_id, user.id)
    return row


def record_search(group_id, criteria, user):
    """History entry for a submitted search (not shown in the saved list)."""
    group_id = require_group_access(user, group_id)
    row = SearchHistory(
        group_id=group_id,
        searcher_id=user.id,
        search_title="",
        search_conditions=_as_dict(criteria),
        is_saved=False,
        searched_at=utcnow(),
    )
    db.session.add(row)
    _commit("record search")
    return row


def load_search(search_id, user):
    row = db.session.get(SearchHistory, search_id)
    if row is None or user is None or not user.can_access(row.group_id):
        return None
    return SearchCriteria.from_dict(row.search_conditions)


def list_searches(group_id, user, saved_only=True):
    group_id = require_group_access(user, group_id)
    q = SearchHistory.query.filter_by(group_id=group_id)
    if saved_only:
        q = q.filter_by(is_saved=True)
    rows = q.order_by(SearchHistory.searched_at.desc(), SearchHistory.id.desc()).all()
    return [
        {
            "id": r.id,
            "name": r.search_title,
            "created_at": r.created_at.isoformat() if r.created_at else None,
            "searched_at": r.searched_at.isoformat() if r.searched_at else None,
        }
        for r in rows
    ]


def rename_search(search_id, name, user):
    row = _get_owned(search_id, user)
    row.search_title = _clean_name(name)
    row.is_saved = True
    _commit("rename search")
    return row


def delete_search(search_id, user):
    row = _get_owned(search_id, user)
    db.session.delete(row)
    _commit("delete search")
    current_app.logger.info("search %s deleted by user %s", search_id, user.id)
