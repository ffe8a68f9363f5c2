from datetime import datetime

from flask import request
from flask_login import login_required, current_user
from . import bp
from .forms import ApplicationForm, GroupForm, StageForm
from ...extensions import db
from ...errors import NotFound
from ...models.candidate import Candidate
from ...services import membership, selection
from ...services.access import require_group_access
from ...services.result_set import ResultSet
from ...utils.decorators import action_boundary
from ...utils.forms import validate_or_raise


def _candidate_or_404(candidate_id):
    candidate = db.session.get(Candidate, candidate_id)
    if candidate is None:
        raise NotFound("候補者が見つかりません")
    return candidate


def _membership_view(group_id):
    return ResultSet(saved=membership.list_saved(group_id), hidden=membership.list_hidden(group_id))


def _progress_payload(progress):
    return {
        "progress": progress.to_dict() if progress is not None else None,
        "slots": [s.to_dict() for s in selection.pipeline_slots(progress)],
    }


@bp.post("/<int:candidate_id>/pickup")
@login_required
@action_boundary
def toggle_pickup(candidate_id):
    form = validate_or_raise(GroupForm)
    _candidate_or_404(candidate_id)
    group_id = require_group_access(current_user, form.group_id.data)
    view = _membership_view(group_id)
    is_pickup = view.toggle_pickup(
        candidate_id, lambda: membership.toggle_saved(candidate_id, group_id, current_user)
    )
    return {"candidate_id": candidate_id, "is_pickup": is_pickup}


@bp.post("/<int:candidate_id>/hidden")
@login_required
@action_boundary
def toggle_hidden(candidate_id):
    form = validate_or_raise(GroupForm)
    _candidate_or_404(candidate_id)
    group_id = require_group_access(current_user, form.group_id.data)
    view = _membership_view(group_id)
    is_hidden = view.toggle_hidden(
        candidate_id, lambda: membership.toggle_hidden(candidate_id, group_id, current_user)
    )
    return {"candidate_id": candidate_id, "is_hidden": is_hidden}


@bp.put("/<int:candidate_id>/saved")
@login_required
@action_boundary
def save_candidate(candidate_id):
    form = validate_or_raise(GroupForm)
    _candidate_or_404(candidate_id)
    outcome = membership.save(candidate_id, form.group_id.data, current_user)
    return {"candidate_id": candidate_id, "outcome": outcome.value}


@bp.delete("/<int:candidate_id>/saved")
@login_required
@action_boundary
def unsave_candidate(candidate_id):
    form = validate_or_raise(GroupForm)
    membership.unsave(candidate_id, form.group_id.data, current_user)
    return {"candidate_id": candidate_id}


@bp.get("/saved")
@login_required
@action_boundary
def saved_ids():
    group_id = require_group_access(current_user, request.args.get("group_id"))
    return sorted(membership.list_saved(group_id))


@bp.get("/hidden")
@login_required
@action_boundary
def hidden_ids():
    group_id = require_group_access(current_user, request.args.get("group_id"))
    return sorted(membership.list_hidden(group_id))


@bp.get("/<int:candidate_id>/progress")
@login_required
@action_boundary
def get_progress(candidate_id):
    progress = selection.get_progress(
        candidate_id,
        request.args.get("group_id"),
        request.args.get("job_posting_id", type=int),
        user=current_user,
    )
    return _progress_payload(progress)


@bp.get("/<int:candidate_id>/progress/all")
@login_required
@action_boundary
def list_progress(candidate_id):
    return [_progress_payload(p) for p in selection.list_progress(candidate_id, current_user)]


@bp.post("/<int:candidate_id>/progress")
@login_required
@action_boundary
def advance_stage(candidate_id):
    form = validate_or_raise(StageForm)
    progress = selection.advance_stage(
        candidate_id,
        form.group_id.data,
        form.job_posting_id.data,
        form.stage.data,
        form.result.data,
        user=current_user,
    )
    return _progress_payload(progress)


@bp.post("/<int:candidate_id>/application")
@login_required
@action_boundary
def record_application(candidate_id):
    form = validate_or_raise(ApplicationForm)
    _candidate_or_404(candidate_id)
    group_id = require_group_access(current_user, form.group_id.data)
    applied_at = None
    if form.applied_at.data:
        applied_at = datetime.combine(form.applied_at.data, datetime.min.time())
    progress = selection.record_application(candidate_id, group_id, form.job_posting_id.data, applied_at)
    return _progress_payload(progress), 201
