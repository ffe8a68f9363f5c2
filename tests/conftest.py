import os
import sys
from datetime import timedelta

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from scoutboard import create_app
from scoutboard.extensions import db
from scoutboard.models import (
    Candidate, CompanyGroup, CompanyUser, CompanyUserGroupPermission, JobHistory, JobPosting,
    JobTypeExperience, WorkExperience,
)
from scoutboard.services.relative_time import utcnow


@pytest.fixture
def app():
    app = create_app("config.TestConfig")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_group(app):
    def _make(group_name="エンジニア採用", company_name="テスト株式会社"):
        group = CompanyGroup(company_name=company_name, group_name=group_name)
        db.session.add(group)
        db.session.commit()
        return group
    return _make


@pytest.fixture
def make_user(app):
    counter = {"n": 0}

    def _make(*groups, password="password123"):
        counter["n"] += 1
        user = CompanyUser(email=f"user{counter['n']}@example.com", full_name=f"担当者{counter['n']}")
        user.set_password(password)
        db.session.add(user)
        db.session.flush()
        for g in groups:
            db.session.add(CompanyUserGroupPermission(company_user_id=user.id, company_group_id=g.id))
        db.session.commit()
        return user
    return _make


@pytest.fixture
def make_candidate(app):
    counter = {"n": 0}

    def _make(job_types=(), industries=(), working=None, login_ago=timedelta(days=2), **fields):
        counter["n"] += 1
        fields.setdefault("last_name", "候補")
        fields.setdefault("first_name", f"{counter['n']}号")
        fields.setdefault("email", f"candidate{counter['n']}@example.com")
        if login_ago is not None:
            fields.setdefault("last_login_at", utcnow() - login_ago)
        c = Candidate(**fields)
        for name, years in job_types:
            c.job_type_experience.append(JobTypeExperience(job_type_name=name, experience_years=years))
        for name, years in industries:
            c.work_experience.append(WorkExperience(industry_name=name, experience_years=years))
        if working is not None:
            c.job_histories.append(JobHistory(
                company_name="前職株式会社", role="エンジニア", start_year=2019, start_month=4,
                end_year=None if working else 2022, end_month=None if working else 3,
            ))
        db.session.add(c)
        db.session.commit()
        return c
    return _make


@pytest.fixture
def make_job(app):
    def _make(group, title="バックエンドエンジニア"):
        job = JobPosting(company_group_id=group.id, title=title)
        db.session.add(job)
        db.session.commit()
        return job
    return _make


@pytest.fixture
def login(client):
    def _login(user, password="password123"):
        res = client.post("/auth/login", json={"email": user.email, "password": password})
        assert res.status_code == 200, res.get_json()
        return res
    return _login
