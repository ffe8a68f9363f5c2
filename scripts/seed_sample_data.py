"""Seed a development database with one company group, a user and a few candidates.

Usage: python scripts/seed_sample_data.py
"""
import os, sys
from datetime import date, timedelta

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from scoutboard import create_app
from scoutboard.extensions import db
from scoutboard.models import (
    Candidate, CareerStatusEntry, CompanyGroup, CompanyUser, CompanyUserGroupPermission,
    JobHistory, JobPosting, JobTypeExperience, ScoutMessage, WorkExperience,
)
from scoutboard.services.relative_time import utcnow
from scoutboard.services.selection import record_application

SAMPLE_EMAIL = "demo@example.com"


def seed():
    if CompanyUser.query.filter_by(email=SAMPLE_EMAIL).first():
        print('already seeded')
        return

    now = utcnow()
    group = CompanyGroup(company_name="サンプル株式会社", group_name="エンジニア採用")
    db.session.add(group)
    db.session.flush()

    user = CompanyUser(email=SAMPLE_EMAIL, full_name="採用 太郎")
    user.set_password("password123")
    db.session.add(user)
    db.session.flush()
    db.session.add(CompanyUserGroupPermission(company_user_id=user.id, company_group_id=group.id, permission_level="admin"))

    job = JobPosting(company_group_id=group.id, title="バックエンドエンジニア")
    db.session.add(job)

    rows = [
        ("山田", "花子", "Webエンジニア", "IT・通信", 600, timedelta(hours=5), True),
        ("佐藤", "健", "営業", "人材", 450, timedelta(days=3), False),
        ("鈴木", "一郎", "データサイエンティスト", "IT・通信", 800, timedelta(days=20), True),
    ]
    for i, (last, first, job_type, industry, income, since, working) in enumerate(rows):
        c = Candidate(
            last_name=last,
            first_name=first,
            email=f"candidate{i + 1}@example.com",
            birth_date=date(1990 + i, 4, 1),
            gender="female" if i == 0 else "male",
            prefecture="東京都",
            last_login_at=now - since,
            current_company=f"{last}商事",
            current_position="メンバー",
            recent_job_company_name=f"{last}商事",
            recent_job_types=[job_type],
            current_income=income,
            desired_job_types=[job_type],
            final_education="大学卒",
            english_level="日常会話",
        )
        c.job_type_experience.append(JobTypeExperience(job_type_name=job_type, experience_years=3 + i))
        c.work_experience.append(WorkExperience(industry_name=industry, experience_years=3 + i))
        c.job_histories.append(JobHistory(
            company_name=f"{last}商事", role="メンバー", start_year=2018, start_month=4,
            end_year=None if working else 2023, end_month=None if working else 3,
        ))
        c.career_status_entries.append(CareerStatusEntry(
            company_name="他社A", industries=[industry], job_types=[job_type], progress_status="一次面接",
        ))
        db.session.add(c)
    db.session.flush()

    for c in Candidate.query.all():
        for _ in range(5):
            db.session.add(ScoutMessage(company_group_id=group.id, candidate_id=c.id, sent_at=now - timedelta(days=2)))
    db.session.commit()

    first = Candidate.query.order_by(Candidate.id).first()
    record_application(first.id, group.id, job.id)
    print(f'seeded group={group.id} user={SAMPLE_EMAIL}')


if __name__ == '__main__':
    app = create_app()
    with app.app_context():
        db.create_all()
        seed()
