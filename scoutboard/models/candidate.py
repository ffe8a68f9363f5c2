from ..extensions import db
from .base import TimestampMixin

class Candidate(db.Model, TimestampMixin):
    __tablename__ = "candidates"

    id = db.Column(db.Integer, primary_key=True)
    last_name = db.Column(db.String(60))
    first_name = db.Column(db.String(60))
    email = db.Column(db.String(254), unique=True, index=True)
    birth_date = db.Column(db.Date)
    gender = db.Column(db.String(10))       # male/female/other
    prefecture = db.Column(db.String(20))
    status = db.Column(db.String(20), default="ACTIVE", index=True)  # ACTIVE/SUSPENDED/WITHDRAWN
    last_login_at = db.Column(db.DateTime, index=True)

    # 現職・直近
    current_company = db.Column(db.String(200))
    current_position = db.Column(db.String(200))
    recent_job_company_name = db.Column(db.String(200))
    recent_job_department_position = db.Column(db.String(200))
    recent_job_description = db.Column(db.Text)
    recent_job_types = db.Column(db.JSON)   # ["Webエンジニア", ...]
    current_income = db.Column(db.Integer)  # 万円

    # 学歴・スキル
    final_education = db.Column(db.String(60))
    school_name = db.Column(db.String(200))
    english_level = db.Column(db.String(30))
    other_language = db.Column(db.String(60))
    other_language_level = db.Column(db.String(30))
    qualifications = db.Column(db.Text)

    # 希望条件
    desired_salary = db.Column(db.Integer)  # 万円
    desired_job_types = db.Column(db.JSON)
    desired_industries = db.Column(db.JSON)
    desired_locations = db.Column(db.JSON)
    desired_work_styles = db.Column(db.JSON)
    transfer_timing = db.Column(db.String(40))

    work_experience = db.relationship("WorkExperience", backref="candidate", lazy="selectin", cascade="all, delete-orphan")
    job_type_experience = db.relationship("JobTypeExperience", backref="candidate", lazy="selectin", cascade="all, delete-orphan")
    job_histories = db.relationship("JobHistory", backref="candidate", lazy="selectin", cascade="all, delete-orphan")
    career_status_entries = db.relationship("CareerStatusEntry", backref="candidate", lazy="selectin", cascade="all, delete-orphan")

    @property
    def full_name(self):
        return " ".join(p for p in (self.last_name, self.first_name) if p)

    def __repr__(self) -> str:
        return f"<Candidate id={self.id} name={self.full_name!r}>"


class WorkExperience(db.Model):
    """業種経験"""
    __tablename__ = "work_experience"
    id = db.Column(db.Integer, primary_key=True)
    candidate_id = db.Column(db.Integer, db.ForeignKey("candidates.id"), nullable=False, index=True)
    industry_name = db.Column(db.String(120), nullable=False)
    experience_years = db.Column(db.Integer)


class JobTypeExperience(db.Model):
    """職種経験"""
    __tablename__ = "job_type_experience"
    id = db.Column(db.Integer, primary_key=True)
    candidate_id = db.Column(db.Integer, db.ForeignKey("candidates.id"), nullable=False, index=True)
    job_type_name = db.Column(db.String(120), nullable=False)
    experience_years = db.Column(db.Integer)


class JobHistory(db.Model):
    """職歴。end_year が空なら在籍中。"""
    __tablename__ = "job_histories"
    id = db.Column(db.Integer, primary_key=True)
    candidate_id = db.Column(db.Integer, db.ForeignKey("candidates.id"), nullable=False, index=True)
    company_name = db.Column(db.String(200))
    role = db.Column(db.String(200))
    start_year = db.Column(db.Integer, nullable=False)
    start_month = db.Column(db.Integer, nullable=False)
    end_year = db.Column(db.Integer)
    end_month = db.Column(db.Integer)

    @property
    def period(self):
        start = f"{self.start_year}/{self.start_month:02d}"
        if self.end_year is None:
            return f"{start}〜現在"
        return f"{start}〜{self.end_year}/{(self.end_month or 1):02d}"


class CareerStatusEntry(db.Model):
    """他社の選考状況（候補者の自己申告）"""
    __tablename__ = "career_status_entries"
    id = db.Column(db.Integer, primary_key=True)
    candidate_id = db.Column(db.Integer, db.ForeignKey("candidates.id"), nullable=False, index=True)
    company_name = db.Column(db.String(200))
    industries = db.Column(db.JSON)
    job_types = db.Column(db.JSON)
    progress_status = db.Column(db.String(40))  # 書類選考/一次面接/...
    is_private = db.Column(db.Boolean, default=False)
