from datetime import datetime

import pytest
from sqlalchemy.exc import OperationalError

from scoutboard.errors import InvalidTransition, NotFound, ValidationError, WriteFailure
from scoutboard.extensions import db
from scoutboard.services import selection


@pytest.fixture
def setup(make_group, make_user, make_candidate, make_job):
    group = make_group()
    user = make_user(group)
    candidate = make_candidate()
    job = make_job(group)
    return group, user, candidate, job


def advance(setup, stage, result):
    group, user, candidate, job = setup
    return selection.advance_stage(candidate.id, group.id, job.id, stage, result, user=user)


def apply(setup):
    group, user, candidate, job = setup
    return selection.record_application(candidate.id, group.id, job.id, datetime(2026, 10, 1))


def test_first_interview_rejected_before_screening(setup):
    apply(setup)
    with pytest.raises(InvalidTransition):
        advance(setup, "first_interview", "pass")
    group, user, candidate, job = setup
    progress = selection.get_progress(candidate.id, group.id, job.id)
    assert progress.first_interview_result is None
    assert progress.document_screening_result is None


def test_screening_requires_application(setup):
    with pytest.raises(InvalidTransition):
        advance(setup, "document_screening", "pass")


def test_full_pipeline(setup):
    apply(setup)
    for stage in ("document_screening", "first_interview", "secondary_interview", "final_interview"):
        progress = advance(setup, stage, "pass")
        assert progress.result_for(stage) == "pass"
        assert getattr(progress, f"{stage}_date") is not None
    progress = advance(setup, "offer", "pass")
    assert progress.offer_result == "accepted"


def test_fail_stops_the_pipeline(setup):
    apply(setup)
    advance(setup, "document_screening", "fail")
    with pytest.raises(InvalidTransition):
        advance(setup, "first_interview", "pass")


def test_resolved_stage_is_final(setup):
    apply(setup)
    advance(setup, "document_screening", "pass")
    with pytest.raises(InvalidTransition):
        advance(setup, "document_screening", "fail")


@pytest.mark.parametrize("stage, result, field", [
    ("hire", "pass", "stage"),
    ("first_interview", "accepted", "result"),
    ("offer", "maybe", "result"),
])
def test_invalid_arguments(setup, stage, result, field):
    apply(setup)
    with pytest.raises(ValidationError) as exc:
        advance(setup, stage, result)
    assert exc.value.field == field


def test_group_permission_checked(setup, make_user, make_group):
    group, user, candidate, job = setup
    outsider = make_user(make_group("別グループ"))
    with pytest.raises(NotFound):
        selection.advance_stage(candidate.id, group.id, job.id, "document_screening", "pass", user=outsider)


def test_store_failure_leaves_state_unchanged(setup, monkeypatch):
    apply(setup)

    def boom():
        raise OperationalError("UPDATE", {}, Exception("db down"))

    monkeypatch.setattr(db.session, "commit", boom)
    with pytest.raises(WriteFailure):
        advance(setup, "document_screening", "pass")
    monkeypatch.undo()

    group, user, candidate, job = setup
    assert selection.get_progress(candidate.id, group.id, job.id).document_screening_result is None


def test_record_application_is_idempotent(setup):
    first = apply(setup)
    group, user, candidate, job = setup
    again = selection.record_application(candidate.id, group.id, job.id, datetime(2026, 10, 5))
    assert again.id == first.id
    assert again.application_date == datetime(2026, 10, 1)


def test_list_progress_across_groups(setup, make_group, make_job):
    group, user, candidate, job = setup
    apply(setup)
    other = make_group("別グループ")
    selection.record_application(candidate.id, other.id, make_job(other).id)
    assert len(selection.list_progress(candidate.id, user)) == 1


def test_pipeline_slots_for_new_application(setup):
    progress = apply(setup)
    slots = selection.pipeline_slots(progress)
    assert [s.key for s in slots] == [
        "application", "document_screening", "first_interview", "secondary_interview",
        "final_interview", "offer", "hire",
    ]
    assert [s.kind for s in slots] == ["date", "action", "placeholder", "placeholder", "placeholder", "placeholder", "placeholder"]
    assert slots[0].value == "2026-10-01"
    assert slots[2].value == "—"


def test_pipeline_slots_show_results(setup):
    apply(setup)
    advance(setup, "document_screening", "pass")
    progress = advance(setup, "first_interview", "fail")
    slots = {s.key: s for s in selection.pipeline_slots(progress)}
    assert slots["document_screening"].value == "通過"
    assert slots["first_interview"].value == "見送り"
    assert slots["secondary_interview"].kind == "placeholder"
    assert slots["hire"].kind == "placeholder"


def test_pipeline_slots_without_progress():
    slots = selection.pipeline_slots(None)
    assert all(s.kind == "placeholder" for s in slots)
