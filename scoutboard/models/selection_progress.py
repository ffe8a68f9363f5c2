from ..extensions import db
from .base import GroupScopedMixin, TimestampMixin

class SelectionProgress(db.Model, GroupScopedMixin, TimestampMixin):
    __tablename__ = "selection_progress"

    id = db.Column(db.Integer, primary_key=True)
    candidate_id = db.Column(db.Integer, db.ForeignKey("candidates.id"), nullable=False, index=True)
    job_posting_id = db.Column(db.Integer, db.ForeignKey("job_postings.id"), index=True)

    # 応募
    application_date = db.Column(db.DateTime)

    # 選考 (pass/fail、内定は accepted/declined)
    document_screening_result = db.Column(db.String(20))
    document_screening_date = db.Column(db.DateTime)
    first_interview_result = db.Column(db.String(20))
    first_interview_date = db.Column(db.DateTime)
    secondary_interview_result = db.Column(db.String(20))
    secondary_interview_date = db.Column(db.DateTime)
    final_interview_result = db.Column(db.String(20))
    final_interview_date = db.Column(db.DateTime)
    offer_result = db.Column(db.String(20))
    offer_date = db.Column(db.DateTime)

    group = db.relationship("CompanyGroup", lazy="joined")
    job_posting = db.relationship("JobPosting", lazy="joined")

    __table_args__ = (
        db.UniqueConstraint("candidate_id", "company_group_id", "job_posting_id", name="uq_progress_candidate_group_job"),
    )

    def result_for(self, stage):
        return getattr(self, f"{stage}_result")

    def to_dict(self):
        out = {c.name: getattr(self, c.name) for c in self.__table__.columns}
        for k, v in out.items():
            if hasattr(v, "isoformat"):
                out[k] = v.isoformat()
        out["group_name"] = self.group.group_name if self.group else ""
        out["job_title"] = self.job_posting.title if self.job_posting else ""
        return out

    def __repr__(self) -> str:
        return f"<SelectionProgress id={self.id} candidate_id={self.candidate_id} group={self.company_group_id}>"
