from dataclasses import asdict

from flask import current_app, request, session
from flask_login import login_required, current_user
from . import bp
from .forms import RenameSearchForm, SaveSearchForm
from ...errors import NotFound, ValidationError
from ...services.access import require_group_access
from ...services.candidate_filter import FilterToggles
from ...services.candidate_sort import SortKey
from ...services.candidates import fetch_candidates
from ...services.criteria import LIST_FIELDS, SEARCH_GROUP_REQUIRED, SearchCriteria
from ...services.membership import list_hidden, list_saved
from ...services.relative_time import utcnow
from ...services.result_set import ResultSet
from ...services import saved_search
from ...utils.decorators import action_boundary
from ...utils.forms import json_object, validate_or_raise

SESSION_KEY = "search_criteria"


def _load_criteria():
    return SearchCriteria.from_session(session.get(SESSION_KEY))


def _store_criteria(criteria):
    session[SESSION_KEY] = criteria.to_session()


def _criteria_payload(criteria, **extra):
    out = {
        "criteria": criteria.to_dict(),
        "query": criteria.to_query(),
        "search_group": {
            "touched": criteria.search_group_touched,
            "error": criteria.search_group_error,
        },
    }
    out.update(extra)
    return out


def _list_field(name):
    if name not in LIST_FIELDS:
        raise NotFound(f"unknown list field: {name}")
    return name


@bp.get("/criteria")
@login_required
@action_boundary
def get_criteria():
    return _criteria_payload(_load_criteria())


@bp.patch("/criteria")
@login_required
@action_boundary
def update_criteria():
    body = json_object()
    criteria = _load_criteria()
    changed, rejected = [], []
    unsubscribe = criteria.subscribe(changed.extend)
    try:
        for name, value in body.items():
            try:
                ok = criteria.set(name, value)
            except ValueError:
                raise ValidationError(f"検索条件が不正です: {name}", field=name)
            if not ok:
                rejected.append(name)
    finally:
        unsubscribe()
    if "search_group" in changed and criteria.search_group_touched:
        criteria.touch_search_group()
    _store_criteria(criteria)
    return _criteria_payload(criteria, changed=sorted(set(changed)), rejected=rejected)


@bp.post("/criteria/reset")
@login_required
@action_boundary
def reset_criteria():
    criteria = _load_criteria()
    criteria.reset_form()
    _store_criteria(criteria)
    return _criteria_payload(criteria)


@bp.post("/criteria/from-query")
@login_required
@action_boundary
def criteria_from_query():
    params = json_object() or request.args
    criteria = SearchCriteria.from_query(params)
    _store_criteria(criteria)
    return _criteria_payload(criteria)


@bp.post("/criteria/items/<list_field>")
@login_required
@action_boundary
def add_criteria_item(list_field):
    list_field = _list_field(list_field)
    body = json_object()
    criteria = _load_criteria()
    try:
        item_id = criteria.add_item(list_field, body.get("name"), body.get("experience_years"))
    except ValueError:
        raise ValidationError("項目名を入力してください", field="name")
    _store_criteria(criteria)
    return _criteria_payload(criteria, item_id=item_id), 201


@bp.patch("/criteria/items/<list_field>/<path:item_id>")
@login_required
@action_boundary
def update_criteria_item(list_field, item_id):
    list_field = _list_field(list_field)
    body = json_object()
    criteria = _load_criteria()
    try:
        criteria.update_experience_years(list_field, item_id, body.get("experience_years"))
    except ValueError:
        raise ValidationError("この項目には経験年数を設定できません", field=list_field)
    _store_criteria(criteria)
    return _criteria_payload(criteria)


@bp.delete("/criteria/items/<list_field>/<path:item_id>")
@login_required
@action_boundary
def remove_criteria_item(list_field, item_id):
    list_field = _list_field(list_field)
    criteria = _load_criteria()
    criteria.remove_item(list_field, item_id)
    _store_criteria(criteria)
    return _criteria_payload(criteria)


@bp.post("/submit")
@login_required
@action_boundary
def submit():
    criteria = _load_criteria()
    criteria.touch_search_group()
    _store_criteria(criteria)
    if not criteria.validate():
        raise ValidationError(SEARCH_GROUP_REQUIRED, field="search_group")
    group_id = require_group_access(current_user, criteria.search_group)
    saved_search.record_search(group_id, criteria, current_user)
    return {"query": criteria.to_query(), "conditions": criteria.to_conditions()}


@bp.get("/results")
@login_required
@action_boundary
def results():
    criteria = _load_criteria()
    group_id = request.args.get("group_id") or criteria.search_group
    if not group_id:
        raise ValidationError(SEARCH_GROUP_REQUIRED, field="search_group")
    group_id = require_group_access(current_user, group_id)

    now = utcnow()
    saved, hidden = list_saved(group_id), list_hidden(group_id)
    views = fetch_candidates(criteria.to_conditions(), now, saved, hidden)

    rs = ResultSet(views, saved, hidden, page_size=current_app.config.get("SEARCH_PAGE_SIZE", 10))
    rs.set_toggles(FilterToggles.from_args(request.args))
    rs.set_sort(SortKey.parse(request.args.get("sort"), default=SortKey.FEATURED))
    rs.set_page(request.args.get("page", default=1, type=int))
    page = rs.visible(now)
    return {
        "candidates": [c.to_dict() for c in page.items],
        "pagination": page.to_dict(),
        "sort": rs.sort_key.value,
        "toggles": asdict(rs.toggles),
    }


@bp.get("/saved")
@login_required
@action_boundary
def list_saved_searches():
    group_id = request.args.get("group_id", type=int)
    return saved_search.list_searches(group_id, current_user)


@bp.get("/history")
@login_required
@action_boundary
def search_history():
    group_id = request.args.get("group_id", type=int)
    return saved_search.list_searches(group_id, current_user, saved_only=False)


@bp.post("/saved")
@login_required
@action_boundary
def save_current_search():
    form = validate_or_raise(SaveSearchForm)
    row = saved_search.save_search(form.group_id.data, form.name.data, _load_criteria(), current_user)
    return {"id": row.id, "name": row.search_title}, 201


@bp.post("/saved/<int:search_id>/load")
@login_required
@action_boundary
def load_saved_search(search_id):
    loaded = saved_search.load_search(search_id, current_user)
    if loaded is None:
        raise NotFound("保存された検索条件が見つかりません")
    criteria = _load_criteria()
    criteria.assign(loaded.to_dict())
    _store_criteria(criteria)
    return _criteria_payload(criteria)


@bp.patch("/saved/<int:search_id>")
@login_required
@action_boundary
def rename_saved_search(search_id):
    form = validate_or_raise(RenameSearchForm)
    row = saved_search.rename_search(search_id, form.name.data, current_user)
    return {"id": row.id, "name": row.search_title}


@bp.delete("/saved/<int:search_id>")
@login_required
@action_boundary
def delete_saved_search(search_id):
    saved_search.delete_search(search_id, current_user)
    return {"id": search_id}
