from ..extensions import db
from .base import GroupScopedMixin, TimestampMixin

class SavedCandidate(db.Model, GroupScopedMixin, TimestampMixin):
    __tablename__ = "saved_candidates"
    id = db.Column(db.Integer, primary_key=True)
    candidate_id = db.Column(db.Integer, db.ForeignKey("candidates.id"), nullable=False, index=True)
    company_user_id = db.Column(db.Integer, db.ForeignKey("company_users.id"))

    __table_args__ = (
        db.UniqueConstraint("company_group_id", "candidate_id", name="uq_saved_group_candidate"),
    )


class HiddenCandidate(db.Model, GroupScopedMixin, TimestampMixin):
    __tablename__ = "hidden_candidates"
    id = db.Column(db.Integer, primary_key=True)
    candidate_id = db.Column(db.Integer, db.ForeignKey("candidates.id"), nullable=False, index=True)
    company_user_id = db.Column(db.Integer, db.ForeignKey("company_users.id"))
    is_hidden = db.Column(db.Boolean, nullable=False, default=True)
    hidden_at = db.Column(db.DateTime)

    __table_args__ = (
        db.UniqueConstraint("company_group_id", "candidate_id", name="uq_hidden_group_candidate"),
    )
