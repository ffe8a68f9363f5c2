"""Selection progress: per (candidate, group, job posting) pass/fail per stage.

The pipeline is strictly linear. A stage can be recorded only when the stage
before it passed (document screening needs an application date), and a
recorded stage is final.
"""
from dataclasses import dataclass

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from ..errors import InvalidTransition, NotFound, ValidationError, WriteFailure
from ..extensions import db
from ..models.selection_progress import SelectionProgress
from .access import require_group_access
from .relative_time import utcnow

STAGES = (
    "document_screening",
    "first_interview",
    "secondary_interview",
    "final_interview",
    "offer",
)
STAGE_RESULTS = ("pass", "fail")
OFFER_RESULTS = ("accepted", "declined")
# 内定: pass/fail で送られてきた場合の読み替え
OFFER_ALIASES = {"pass": "accepted", "fail": "declined"}

STAGE_LABELS = {
    "application": "応募",
    "document_screening": "書類選考",
    "first_interview": "一次面接",
    "secondary_interview": "二次面接以降",
    "final_interview": "最終面接",
    "offer": "内定",
    "hire": "入社",
}
SLOTS = ("application",) + STAGES + ("hire",)

RESULT_BADGES = {"pass": "通過", "fail": "見送り", "accepted": "通過", "declined": "見送り"}
PLACEHOLDER = "—"


@dataclass(frozen=True)
class PipelineSlot:
    key: str
    label: str
    kind: str  # date / result / action / placeholder
    value: str = PLACEHOLDER

    def to_dict(self):
        return {"key": self.key, "label": self.label, "kind": self.kind, "value": self.value}


def normalize_result(stage, result) -> str:
    if stage not in STAGES:
        raise ValidationError("選考ステージが不正です", field="stage")
    result = (result or "").strip().lower()
    if stage == "offer":
        result = OFFER_ALIASES.get(result, result)
        allowed = OFFER_RESULTS
    else:
        allowed = STAGE_RESULTS
    if result not in allowed:
        raise ValidationError("選考結果が不正です", field="result")
    return result


def can_advance(progress, stage) -> bool:
    """Whether ``stage`` is open for recording on ``progress`` (may be None)."""
    if progress is None:
        return False
    if progress.result_for(stage):
        return False
    i = STAGES.index(stage)
    if i == 0:
        return progress.application_date is not None
    return progress.result_for(STAGES[i - 1]) == "pass"


def _find(candidate_id, company_group_id, job_posting_id):
    return SelectionProgress.query.filter_by(
        candidate_id=candidate_id,
        company_group_id=company_group_id,
        job_posting_id=job_posting_id,
    ).first()


def advance_stage(candidate_id, company_group_id, job_posting_id, stage, result, user=None):
    if user is not None:
        company_group_id = require_group_access(user, company_group_id)
    result = normalize_result(stage, result)

    progress = _find(candidate_id, company_group_id, job_posting_id)
    if progress is not None and progress.result_for(stage):
        raise InvalidTransition("この選考ステージは既に結果が登録されています", field="stage")
    if not can_advance(progress, stage):
        raise InvalidTransition("前の選考ステージを通過していません", field="stage")

    setattr(progress, f"{stage}_result", result)
    setattr(progress, f"{stage}_date", utcnow())
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.exception("advance stage failed: %s", e)
        raise WriteFailure()
    db.session.refresh(progress)
    current_app.logger.info(
        "selection progress %s: %s=%s (candidate=%s group=%s job=%s)",
        progress.id, stage, result, candidate_id, company_group_id, job_posting_id,
    )
    return progress


def record_application(candidate_id, company_group_id, job_posting_id, applied_at=None):
    progress = _find(candidate_id, company_group_id, job_posting_id)
    if progress is not None and progress.application_date is not None:
        return progress
    if progress is None:
        progress = SelectionProgress(
            candidate_id=candidate_id,
            company_group_id=company_group_id,
            job_posting_id=job_posting_id,
        )
        db.session.add(progress)
    progress.application_date = applied_at or utcnow()
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.exception("record application failed: %s", e)
        raise WriteFailure()
    current_app.logger.info("application recorded: candidate=%s group=%s job=%s", candidate_id, company_group_id, job_posting_id)
    return progress


def get_progress(candidate_id, company_group_id, job_posting_id=None, user=None):
    if user is not None:
        company_group_id = require_group_access(user, company_group_id)
    q = SelectionProgress.query.filter_by(candidate_id=candidate_id, company_group_id=company_group_id)
    if job_posting_id is not None:
        q = q.filter_by(job_posting_id=job_posting_id)
    return q.order_by(SelectionProgress.created_at.desc(), SelectionProgress.id.desc()).first()


def list_progress(candidate_id, user):
    group_ids = user.group_ids() if user is not None else set()
    if not group_ids:
        raise NotFound("アクセス可能なグループがありません")
    return (
        SelectionProgress.query
        .filter(SelectionProgress.candidate_id == candidate_id)
        .filter(SelectionProgress.company_group_id.in_(group_ids))
        .order_by(SelectionProgress.created_at.desc(), SelectionProgress.id.desc())
        .all()
    )


def pipeline_slots(progress):
    """The seven display slots for one progress row (None = not started)."""
    slots = []
    for key in SLOTS:
        label = STAGE_LABELS[key]
        if key == "application":
            date = progress.application_date if progress is not None else None
            if date is not None:
                slots.append(PipelineSlot(key, label, "date", date.date().isoformat()))
            else:
                slots.append(PipelineSlot(key, label, "placeholder"))
            continue
        if key == "hire":
            slots.append(PipelineSlot(key, label, "placeholder"))
            continue
        result = progress.result_for(key) if progress is not None else None
        if result:
            slots.append(PipelineSlot(key, label, "result", RESULT_BADGES.get(result, result)))
        elif can_advance(progress, key):
            slots.append(PipelineSlot(key, label, "action", ""))
        else:
            slots.append(PipelineSlot(key, label, "placeholder"))
    return slots
