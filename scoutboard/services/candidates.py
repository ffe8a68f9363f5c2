"""Candidate query service and the display projection used by search results."""
from dataclasses import asdict, dataclass
from datetime import date, timedelta

from flask import current_app
from sqlalchemy import and_, or_

from ..models.candidate import Candidate, JobTypeExperience, WorkExperience
from ..models.scout import ScoutMessage
from .classify import CandidateSignals, ScoutStats, classify
from .relative_time import format_relative_time, utcnow

GENDER_LABELS = {"male": "男性", "female": "女性"}
MAX_LIST_ITEMS = 3


@dataclass(frozen=True)
class CareerEntry:
    period: str
    company: str
    role: str


@dataclass(frozen=True)
class SelectionCompany:
    company: str
    detail: str


@dataclass(frozen=True)
class CandidateView:
    id: int
    name: str = ""
    company_name: str = "企業名未設定"
    department: str = "部署名未設定"
    position: str = "役職未設定"
    location: str = "未設定"
    age: str = "年齢未設定"
    gender: str = "未設定"
    salary: str = "年収未設定"
    degree: str = "学歴未設定"
    university: str = "学校名未設定"
    language_level: str = "英語レベル未設定"
    is_attention: bool = False
    badge_type: str = "none"
    badge_text: str = ""
    last_login: str = "未ログイン"
    updated_at: object = None
    is_pickup: bool = False
    is_hidden: bool = False
    experience_jobs: tuple = ()
    experience_industries: tuple = ()
    career_history: tuple = ()
    selection_companies: tuple = ()

    def to_dict(self):
        out = asdict(self)
        if self.updated_at is not None:
            out["updated_at"] = self.updated_at.isoformat()
        return out


def age_label(birth_date, today=None) -> str:
    if not birth_date:
        return "年齢未設定"
    today = today or date.today()
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return f"{age}歳"


def _years_ago(today, years):
    try:
        return today.replace(year=today.year - years)
    except ValueError:
        # 2/29
        return today.replace(year=today.year - years, day=28)


def _career_history(candidate):
    rows = sorted(candidate.job_histories, key=lambda h: (h.start_year, h.start_month), reverse=True)
    return tuple(
        CareerEntry(period=h.period, company=h.company_name or "企業名未設定", role=h.role or "役職未設定")
        for h in rows
    )


def _selection_entries(candidate):
    return [e for e in candidate.career_status_entries if e.progress_status and not e.is_private]


def scout_stats_for(candidate_ids, now=None):
    """Scouts received in the last month and replies, per candidate id."""
    if not candidate_ids:
        return {}
    now = now or utcnow()
    month_ago = now - timedelta(days=30)
    rows = (
        ScoutMessage.query.with_entities(ScoutMessage.candidate_id, ScoutMessage.sent_at, ScoutMessage.replied_at)
        .filter(ScoutMessage.candidate_id.in_(list(candidate_ids)))
        .all()
    )
    received, replies = {}, {}
    for cid, sent_at, replied_at in rows:
        if sent_at and sent_at >= month_ago:
            received[cid] = received.get(cid, 0) + 1
        if replied_at:
            replies[cid] = replies.get(cid, 0) + 1
    return {cid: ScoutStats(received.get(cid, 0), replies.get(cid, 0)) for cid in candidate_ids}


def to_candidate_view(candidate, stats=None, now=None, saved=frozenset(), hidden=frozenset(), **thresholds):
    now = now or utcnow()
    stats = stats or ScoutStats()
    selecting = _selection_entries(candidate)

    selection_job_types = tuple(jt for e in selecting for jt in (e.job_types or []))
    signals = CandidateSignals(
        last_login_at=candidate.last_login_at,
        recent_job_types=tuple(candidate.recent_job_types or ()),
        desired_job_types=tuple(candidate.desired_job_types or ()),
        selection_job_types=selection_job_types,
    )
    result = classify(signals, stats, now, **thresholds)

    jobs = [e.job_type_name for e in candidate.job_type_experience if e.job_type_name]
    industries = [e.industry_name for e in candidate.work_experience if e.industry_name]
    companies = tuple(
        SelectionCompany(
            company=e.company_name or "企業名未設定",
            detail="、".join(e.industries) if isinstance(e.industries, list) and e.industries else "業界情報なし",
        )
        for e in selecting[:MAX_LIST_ITEMS]
    )

    return CandidateView(
        id=candidate.id,
        name=candidate.full_name,
        company_name=candidate.recent_job_company_name or candidate.current_company or "企業名未設定",
        department=candidate.recent_job_department_position or "部署名未設定",
        position=candidate.current_position or "役職未設定",
        location=candidate.prefecture or "未設定",
        age=age_label(candidate.birth_date, now.date()),
        gender=GENDER_LABELS.get(candidate.gender, "未設定"),
        salary=f"{candidate.current_income}万円" if candidate.current_income else "年収未設定",
        degree=candidate.final_education or "学歴未設定",
        university=candidate.school_name or "学校名未設定",
        language_level=candidate.english_level or "英語レベル未設定",
        is_attention=result.is_attention,
        badge_type=result.badge_type,
        badge_text=result.badge_text,
        last_login=format_relative_time(candidate.last_login_at, now),
        updated_at=candidate.updated_at,
        is_pickup=candidate.id in saved,
        is_hidden=candidate.id in hidden,
        experience_jobs=tuple(jobs[:MAX_LIST_ITEMS]) or ("経験職種未設定",),
        experience_industries=tuple(industries[:MAX_LIST_ITEMS]) or ("経験業種未設定",),
        career_history=_career_history(candidate),
        selection_companies=companies,
    )


def _experience_filter(relationship, column, years_column, items, and_search):
    clauses = []
    for item in items:
        cond = column == item["name"]
        if item.get("experience_years"):
            cond = cond & (years_column >= item["experience_years"])
        clauses.append(relationship.any(cond))
    if not clauses:
        return None
    if and_search:
        return and_(*clauses)
    return or_(*clauses)


def build_candidate_query(conditions, now=None):
    """Translate typed search conditions into a SQLAlchemy query.

    Only query-parameter filtering happens here; desired-condition arrays are
    carried in the conditions but not matched against the store.
    """
    now = now or utcnow()
    conditions = conditions or {}
    query = Candidate.query.filter(Candidate.status == "ACTIVE")

    keyword = conditions.get("keyword")
    if keyword:
        like = f"%{keyword}%"
        query = query.filter(or_(
            Candidate.last_name.ilike(like),
            Candidate.first_name.ilike(like),
            Candidate.current_company.ilike(like),
            Candidate.current_position.ilike(like),
            Candidate.recent_job_company_name.ilike(like),
            Candidate.recent_job_department_position.ilike(like),
            Candidate.recent_job_description.ilike(like),
        ))

    job_clause = _experience_filter(
        Candidate.job_type_experience, JobTypeExperience.job_type_name, JobTypeExperience.experience_years,
        conditions.get("experience_job_types") or [], conditions.get("job_type_and_search"),
    )
    if job_clause is not None:
        query = query.filter(job_clause)
    industry_clause = _experience_filter(
        Candidate.work_experience, WorkExperience.industry_name, WorkExperience.experience_years,
        conditions.get("experience_industries") or [], conditions.get("industry_and_search"),
    )
    if industry_clause is not None:
        query = query.filter(industry_clause)

    if conditions.get("current_salary_min") is not None:
        query = query.filter(Candidate.current_income >= conditions["current_salary_min"])
    if conditions.get("current_salary_max") is not None:
        query = query.filter(Candidate.current_income <= conditions["current_salary_max"])
    if conditions.get("desired_salary_min") is not None:
        query = query.filter(Candidate.desired_salary >= conditions["desired_salary_min"])
    if conditions.get("desired_salary_max") is not None:
        query = query.filter(Candidate.desired_salary <= conditions["desired_salary_max"])

    today = now.date()
    if conditions.get("age_min") is not None:
        query = query.filter(Candidate.birth_date <= _years_ago(today, conditions["age_min"]))
    if conditions.get("age_max") is not None:
        query = query.filter(Candidate.birth_date > _years_ago(today, conditions["age_max"] + 1))

    if conditions.get("current_company"):
        like = f"%{conditions['current_company']}%"
        query = query.filter(or_(Candidate.current_company.ilike(like), Candidate.recent_job_company_name.ilike(like)))
    if conditions.get("education"):
        query = query.filter(Candidate.final_education == conditions["education"])
    if conditions.get("english_level"):
        query = query.filter(Candidate.english_level == conditions["english_level"])
    if conditions.get("other_language"):
        query = query.filter(Candidate.other_language.ilike(f"%{conditions['other_language']}%"))
    if conditions.get("qualifications"):
        query = query.filter(Candidate.qualifications.ilike(f"%{conditions['qualifications']}%"))
    if conditions.get("last_login_min"):
        query = query.filter(Candidate.last_login_at >= now - timedelta(days=conditions["last_login_min"]))

    return query.order_by(Candidate.last_login_at.desc(), Candidate.id.desc())


def fetch_candidates(conditions=None, now=None, saved=frozenset(), hidden=frozenset()):
    now = now or utcnow()
    rows = build_candidate_query(conditions, now).all()
    stats = scout_stats_for([c.id for c in rows], now)
    cfg = current_app.config
    thresholds = {
        "login_hours": cfg.get("ATTENTION_LOGIN_HOURS", 72),
        "min_scouts": cfg.get("ATTENTION_MIN_SCOUTS", 5),
        "min_replies": cfg.get("ATTENTION_MIN_REPLIES", 1),
    }
    views = [to_candidate_view(c, stats.get(c.id), now, saved, hidden, **thresholds) for c in rows]
    current_app.logger.debug("fetched %d candidates for conditions %s", len(views), conditions)
    return views
