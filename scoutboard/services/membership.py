"""Saved (pickup) and hidden candidate sets, scoped per company group."""
from enum import Enum

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..errors import WriteFailure
from ..extensions import db
from ..models.membership import HiddenCandidate, SavedCandidate
from .access import require_group_access
from .relative_time import utcnow


class SaveOutcome(str, Enum):
    SAVED = "saved"
    ALREADY_SAVED = "already_saved"


def _write_failed(action, exc):
    db.session.rollback()
    current_app.logger.exception("%s failed: %s", action, exc)
    return WriteFailure()


def _saved_row(candidate_id, group_id):
    return SavedCandidate.query.filter_by(company_group_id=group_id, candidate_id=candidate_id).first()


def _hidden_row(candidate_id, group_id):
    return HiddenCandidate.query.filter_by(company_group_id=group_id, candidate_id=candidate_id).first()


def save(candidate_id, group_id, user):
    group_id = require_group_access(user, group_id)
    db.session.add(SavedCandidate(candidate_id=candidate_id, company_group_id=group_id, company_user_id=user.id))
    try:
        db.session.commit()
    except IntegrityError:
        # 既に保存済み
        db.session.rollback()
        return SaveOutcome.ALREADY_SAVED
    except SQLAlchemyError as e:
        raise _write_failed("save candidate", e)
    current_app.logger.info("candidate %s saved to group %s by user %s", candidate_id, group_id, user.id)
    return SaveOutcome.SAVED


def unsave(candidate_id, group_id, user):
    group_id = require_group_access(user, group_id)
    try:
        SavedCandidate.query.filter_by(company_group_id=group_id, candidate_id=candidate_id).delete()
        db.session.commit()
    except SQLAlchemyError as e:
        raise _write_failed("unsave candidate", e)
    current_app.logger.info("candidate %s removed from group %s saved list", candidate_id, group_id)


def toggle_saved(candidate_id, group_id, user) -> bool:
    """Flip saved membership; returns True when the candidate is now saved."""
    group_id = require_group_access(user, group_id)
    if _saved_row(candidate_id, group_id) is not None:
        unsave(candidate_id, group_id, user)
        return False
    save(candidate_id, group_id, user)
    return True


def toggle_hidden(candidate_id, group_id, user) -> bool:
    """Flip the hidden flag; the first toggle for a candidate hides it."""
    group_id = require_group_access(user, group_id)
    row = _hidden_row(candidate_id, group_id)
    try:
        if row is None:
            row = HiddenCandidate(
                candidate_id=candidate_id,
                company_group_id=group_id,
                company_user_id=user.id,
                is_hidden=True,
                hidden_at=utcnow(),
            )
            db.session.add(row)
        else:
            row.is_hidden = not row.is_hidden
            row.company_user_id = user.id
            row.hidden_at = utcnow() if row.is_hidden else None
        db.session.commit()
    except SQLAlchemyError as e:
        raise _write_failed("toggle hidden", e)
    current_app.logger.info("candidate %s hidden=%s in group %s", candidate_id, row.is_hidden, group_id)
    return row.is_hidden


def list_saved(group_id) -> set:
    rows = (
        SavedCandidate.query.with_entities(SavedCandidate.candidate_id)
        .filter(SavedCandidate.company_group_id == group_id)
    )
    return {cid for (cid,) in rows}


def list_hidden(group_id) -> set:
    rows = (
        HiddenCandidate.query.with_entities(HiddenCandidate.candidate_id)
        .filter(HiddenCandidate.company_group_id == group_id, HiddenCandidate.is_hidden.is_(True))
    )
    return {cid for (cid,) in rows}
