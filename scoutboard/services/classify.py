from dataclasses import dataclass, field
from datetime import timedelta

BADGE_NONE = "none"
BADGE_CAREER_CHANGE = "career_change"
BADGE_PROFESSIONAL = "professional"
BADGE_MULTIPLE = "multiple_offers"

BADGE_TEXT = {
    BADGE_NONE: "",
    BADGE_CAREER_CHANGE: "キャリアチェンジ志向",
    BADGE_PROFESSIONAL: "専門性追求志向",
    BADGE_MULTIPLE: "多職種志向",
}


@dataclass(frozen=True)
class ScoutStats:
    received_last_month: int = 0
    replies: int = 0


@dataclass(frozen=True)
class CandidateSignals:
    """Raw inputs the classifier looks at, decoupled from the ORM row."""
    last_login_at: object = None
    recent_job_types: tuple = ()
    desired_job_types: tuple = ()
    selection_job_types: tuple = field(default=())  # 選考中企業の職種


@dataclass(frozen=True)
class Classification:
    is_attention: bool
    badge_type: str
    badge_text: str


def is_attention(signals, stats, now, login_hours=72, min_scouts=5, min_replies=1) -> bool:
    """注目: recent login, plenty of scouts received, and at least one reply."""
    if signals.last_login_at is None:
        return False
    if signals.last_login_at < now - timedelta(hours=login_hours):
        return False
    return stats.received_last_month >= min_scouts and stats.replies >= min_replies


def badge_for(signals) -> str:
    current = {j.lower() for j in signals.recent_job_types if j}
    selecting = {j.lower() for j in signals.selection_job_types if j}
    desired = [j.lower() for j in signals.desired_job_types if j]

    if len(selecting) >= 3:
        return BADGE_MULTIPLE
    if current and selecting and selecting <= current:
        return BADGE_PROFESSIONAL
    if current and desired and any(d not in current for d in desired):
        return BADGE_CAREER_CHANGE
    return BADGE_NONE


def classify(signals, stats, now, **thresholds) -> Classification:
    badge = badge_for(signals)
    return Classification(
        is_attention=is_attention(signals, stats, now, **thresholds),
        badge_type=badge,
        badge_text=BADGE_TEXT[badge],
    )
