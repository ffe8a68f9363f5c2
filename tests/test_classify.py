from datetime import datetime, timedelta

from scoutboard.services.classify import (
    BADGE_CAREER_CHANGE, BADGE_MULTIPLE, BADGE_NONE, BADGE_PROFESSIONAL,
    CandidateSignals, ScoutStats, badge_for, classify, is_attention,
)

NOW = datetime(2026, 10, 19, 12, 0, 0)
ACTIVE = ScoutStats(received_last_month=5, replies=1)


def test_attention_requires_recent_login_scouts_and_reply():
    recent = CandidateSignals(last_login_at=NOW - timedelta(hours=10))
    assert is_attention(recent, ACTIVE, NOW)
    assert not is_attention(recent, ScoutStats(4, 1), NOW)
    assert not is_attention(recent, ScoutStats(9, 0), NOW)
    stale = CandidateSignals(last_login_at=NOW - timedelta(hours=73))
    assert not is_attention(stale, ACTIVE, NOW)
    assert not is_attention(CandidateSignals(), ACTIVE, NOW)


def test_attention_thresholds_are_configurable():
    signals = CandidateSignals(last_login_at=NOW - timedelta(hours=100))
    assert is_attention(signals, ScoutStats(2, 1), NOW, login_hours=120, min_scouts=2)


def test_multiple_offers_badge():
    signals = CandidateSignals(selection_job_types=("営業", "企画", "マーケティング"))
    assert badge_for(signals) == BADGE_MULTIPLE


def test_professional_badge():
    signals = CandidateSignals(recent_job_types=("Webエンジニア", "SRE"), selection_job_types=("webエンジニア",))
    assert badge_for(signals) == BADGE_PROFESSIONAL


def test_career_change_badge():
    signals = CandidateSignals(recent_job_types=("営業",), desired_job_types=("営業", "企画"))
    assert badge_for(signals) == BADGE_CAREER_CHANGE


def test_no_badge_defaults_to_empty_text():
    result = classify(CandidateSignals(), ScoutStats(), NOW)
    assert result.badge_type == BADGE_NONE
    assert result.badge_text == ""
    assert result.is_attention is False


def test_classify_combines_both():
    signals = CandidateSignals(
        last_login_at=NOW - timedelta(hours=1),
        recent_job_types=("営業",),
        desired_job_types=("企画",),
    )
    result = classify(signals, ACTIVE, NOW)
    assert result.is_attention
    assert result.badge_text == "キャリアチェンジ志向"
