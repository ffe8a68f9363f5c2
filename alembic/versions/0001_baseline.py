"""Baseline schema: company groups/users, candidates, selection progress, saved/hidden sets, search history

Revision ID: 0001_baseline
Revises: None
Create Date: 2026-10-19 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_baseline'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    ]


def _group_id():
    return sa.Column('company_group_id', sa.Integer(), sa.ForeignKey('company_groups.id'), nullable=False, index=True)


def upgrade() -> None:
    op.create_table(
        'company_groups',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('company_name', sa.String(200), nullable=False),
        sa.Column('group_name', sa.String(120), nullable=False),
        *_timestamps(),
    )
    op.create_table(
        'company_users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('full_name', sa.String(120)),
        sa.Column('password_hash', sa.String(255), nullable=False),
        *_timestamps(),
    )
    op.create_table(
        'company_user_group_permissions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('company_user_id', sa.Integer(), sa.ForeignKey('company_users.id'), nullable=False, index=True),
        sa.Column('company_group_id', sa.Integer(), sa.ForeignKey('company_groups.id'), nullable=False, index=True),
        sa.Column('permission_level', sa.String(20)),
        *_timestamps(),
        sa.UniqueConstraint('company_user_id', 'company_group_id', name='uq_permission_user_group'),
    )
    op.create_table(
        'candidates',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('last_name', sa.String(60)),
        sa.Column('first_name', sa.String(60)),
        sa.Column('email', sa.String(254), unique=True, index=True),
        sa.Column('birth_date', sa.Date()),
        sa.Column('gender', sa.String(10)),
        sa.Column('prefecture', sa.String(20)),
        sa.Column('status', sa.String(20), index=True),
        sa.Column('last_login_at', sa.DateTime(), index=True),
        sa.Column('current_company', sa.String(200)),
        sa.Column('current_position', sa.String(200)),
        sa.Column('recent_job_company_name', sa.String(200)),
        sa.Column('recent_job_department_position', sa.String(200)),
        sa.Column('recent_job_description', sa.Text()),
        sa.Column('recent_job_types', sa.JSON()),
        sa.Column('current_income', sa.Integer()),
        sa.Column('final_education', sa.String(60)),
        sa.Column('school_name', sa.String(200)),
        sa.Column('english_level', sa.String(30)),
        sa.Column('other_language', sa.String(60)),
        sa.Column('other_language_level', sa.String(30)),
        sa.Column('qualifications', sa.Text()),
        sa.Column('desired_salary', sa.Integer()),
        sa.Column('desired_job_types', sa.JSON()),
        sa.Column('desired_industries', sa.JSON()),
        sa.Column('desired_locations', sa.JSON()),
        sa.Column('desired_work_styles', sa.JSON()),
        sa.Column('transfer_timing', sa.String(40)),
        *_timestamps(),
    )
    op.create_table(
        'work_experience',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('candidate_id', sa.Integer(), sa.ForeignKey('candidates.id'), nullable=False, index=True),
        sa.Column('industry_name', sa.String(120), nullable=False),
        sa.Column('experience_years', sa.Integer()),
    )
    op.create_table(
        'job_type_experience',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('candidate_id', sa.Integer(), sa.ForeignKey('candidates.id'), nullable=False, index=True),
        sa.Column('job_type_name', sa.String(120), nullable=False),
        sa.Column('experience_years', sa.Integer()),
    )
    op.create_table(
        'job_histories',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('candidate_id', sa.Integer(), sa.ForeignKey('candidates.id'), nullable=False, index=True),
        sa.Column('company_name', sa.String(200)),
        sa.Column('role', sa.String(200)),
        sa.Column('start_year', sa.Integer(), nullable=False),
        sa.Column('start_month', sa.Integer(), nullable=False),
        sa.Column('end_year', sa.Integer()),
        sa.Column('end_month', sa.Integer()),
    )
    op.create_table(
        'career_status_entries',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('candidate_id', sa.Integer(), sa.ForeignKey('candidates.id'), nullable=False, index=True),
        sa.Column('company_name', sa.String(200)),
        sa.Column('industries', sa.JSON()),
        sa.Column('job_types', sa.JSON()),
        sa.Column('progress_status', sa.String(40)),
        sa.Column('is_private', sa.Boolean()),
    )
    op.create_table(
        'job_postings',
        sa.Column('id', sa.Integer(), primary_key=True),
        _group_id(),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('status', sa.String(20)),
        *_timestamps(),
    )
    op.create_table(
        'scout_messages',
        sa.Column('id', sa.Integer(), primary_key=True),
        _group_id(),
        sa.Column('candidate_id', sa.Integer(), sa.ForeignKey('candidates.id'), nullable=False, index=True),
        sa.Column('sent_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('replied_at', sa.DateTime()),
        *_timestamps(),
    )
    op.create_table(
        'selection_progress',
        sa.Column('id', sa.Integer(), primary_key=True),
        _group_id(),
        sa.Column('candidate_id', sa.Integer(), sa.ForeignKey('candidates.id'), nullable=False, index=True),
        sa.Column('job_posting_id', sa.Integer(), sa.ForeignKey('job_postings.id'), index=True),
        sa.Column('application_date', sa.DateTime()),
        sa.Column('document_screening_result', sa.String(20)),
        sa.Column('document_screening_date', sa.DateTime()),
        sa.Column('first_interview_result', sa.String(20)),
        sa.Column('first_interview_date', sa.DateTime()),
        sa.Column('secondary_interview_result', sa.String(20)),
        sa.Column('secondary_interview_date', sa.DateTime()),
        sa.Column('final_interview_result', sa.String(20)),
        sa.Column('final_interview_date', sa.DateTime()),
        sa.Column('offer_result', sa.String(20)),
        sa.Column('offer_date', sa.DateTime()),
        *_timestamps(),
        sa.UniqueConstraint('candidate_id', 'company_group_id', 'job_posting_id', name='uq_progress_candidate_group_job'),
    )
    op.create_table(
        'saved_candidates',
        sa.Column('id', sa.Integer(), primary_key=True),
        _group_id(),
        sa.Column('candidate_id', sa.Integer(), sa.ForeignKey('candidates.id'), nullable=False, index=True),
        sa.Column('company_user_id', sa.Integer(), sa.ForeignKey('company_users.id')),
        *_timestamps(),
        sa.UniqueConstraint('company_group_id', 'candidate_id', name='uq_saved_group_candidate'),
    )
    op.create_table(
        'hidden_candidates',
        sa.Column('id', sa.Integer(), primary_key=True),
        _group_id(),
        sa.Column('candidate_id', sa.Integer(), sa.ForeignKey('candidates.id'), nullable=False, index=True),
        sa.Column('company_user_id', sa.Integer(), sa.ForeignKey('company_users.id')),
        sa.Column('is_hidden', sa.Boolean(), nullable=False),
        sa.Column('hidden_at', sa.DateTime()),
        *_timestamps(),
        sa.UniqueConstraint('company_group_id', 'candidate_id', name='uq_hidden_group_candidate'),
    )
    op.create_table(
        'search_history',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('group_id', sa.Integer(), sa.ForeignKey('company_groups.id'), nullable=False, index=True),
        sa.Column('searcher_id', sa.Integer(), sa.ForeignKey('company_users.id'), nullable=False),
        sa.Column('search_title', sa.String(200), nullable=False),
        sa.Column('search_conditions', sa.JSON(), nullable=False),
        sa.Column('is_saved', sa.Boolean(), nullable=False, index=True),
        sa.Column('searched_at', sa.DateTime(), server_default=sa.func.now()),
        *_timestamps(),
    )


def downgrade() -> None:
    for name in (
        'search_history', 'hidden_candidates', 'saved_candidates', 'selection_progress',
        'scout_messages', 'job_postings', 'career_status_entries', 'job_histories',
        'job_type_experience', 'work_experience', 'candidates',
        'company_user_group_permissions', 'company_users', 'company_groups',
    ):
        op.drop_table(name)
