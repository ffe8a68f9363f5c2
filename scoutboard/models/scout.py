from ..extensions import db
from .base import GroupScopedMixin, TimestampMixin

class ScoutMessage(db.Model, GroupScopedMixin, TimestampMixin):
    __tablename__ = "scout_messages"
    id = db.Column(db.Integer, primary_key=True)
    candidate_id = db.Column(db.Integer, db.ForeignKey("candidates.id"), nullable=False, index=True)
    sent_at = db.Column(db.DateTime, nullable=False, server_default=db.func.now())
    replied_at = db.Column(db.DateTime)
