from ..extensions import db
from .base import GroupScopedMixin, TimestampMixin

class JobPosting(db.Model, GroupScopedMixin, TimestampMixin):
    __tablename__ = "job_postings"
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    status = db.Column(db.String(20), default="PUBLISHED")  # DRAFT/PENDING/PUBLISHED/CLOSED

    def __repr__(self) -> str:
        return f"<JobPosting id={self.id} title={self.title!r}>"
