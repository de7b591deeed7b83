"""initial_schema

Revision ID: 3f6c1a2b9d10
Revises:
Create Date: 2025-10-20 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3f6c1a2b9d10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def upgrade() -> None:
    # 1. user (active_resume_id FK is added after resume exists)
    op.create_table(
        'user',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('full_name', sa.String(100), nullable=False),
        sa.Column('phone', sa.String(50)),
        sa.Column('location', sa.String(200)),
        sa.Column('linkedin_url', sa.String(500)),
        sa.Column('github_url', sa.String(500)),
        sa.Column('portfolio_url', sa.String(500)),
        sa.Column('avatar_url', sa.String(500)),
        sa.Column('active_resume_id', sa.Uuid(), nullable=True),
        sa.Column('total_jobs_discovered', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_jobs_applied', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('analytics', postgresql.JSONB(), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true()),
        sa.Column('last_login_at', sa.DateTime(timezone=True)),
        *_timestamps(),
    )
    op.create_index('ix_user_email', 'user', ['email'], unique=True)
    op.create_index('ix_user_is_active', 'user', ['is_active'])
    op.create_index('ix_user_created_at', 'user', ['created_at'])

    # 2. resume
    op.create_table(
        'resume',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('user.id', ondelete='CASCADE'), nullable=False),
        sa.Column('file_id', sa.String(64)),
        sa.Column('original_file_name', sa.String(500)),
        sa.Column('file_size', sa.Integer()),
        sa.Column('mime_type', sa.String(100)),
        sa.Column('raw_text', sa.Text(), nullable=False),
        sa.Column('page_count', sa.Integer()),
        sa.Column('structured_json', postgresql.JSONB()),
        sa.Column('skills', postgresql.JSONB(), nullable=False),
        sa.Column('experience', postgresql.JSONB(), nullable=False),
        sa.Column('education', postgresql.JSONB(), nullable=False),
        sa.Column('parsing_version', sa.String(20)),
        sa.Column('ai_model', sa.String(100)),
        sa.Column('parsing_confidence', sa.Integer()),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.CheckConstraint('parsing_confidence >= 0 AND parsing_confidence <= 100', name='ck_resume_confidence'),
    )
    op.create_index('ix_resume_user_id', 'resume', ['user_id'])
    op.create_index('ix_resume_created_at', 'resume', ['created_at'])
    op.create_index('idx_resume_user_active', 'resume', ['user_id', 'is_active'])
    # at most one active resume per user
    op.create_index(
        'uq_resume_user_active',
        'resume',
        ['user_id'],
        unique=True,
        postgresql_where=sa.text('is_active')
    )

    op.create_foreign_key(
        'fk_user_active_resume', 'user', 'resume',
        ['active_resume_id'], ['id'],
        ondelete='SET NULL'
    )

    # 3. job_match
    op.create_table(
        'job_match',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('user.id', ondelete='CASCADE'), nullable=False),
        sa.Column('resume_id', sa.Uuid(), sa.ForeignKey('resume.id', ondelete='SET NULL')),
        sa.Column('job_title', sa.String(500), nullable=False),
        sa.Column('company', sa.String(255), nullable=False),
        sa.Column('location', sa.String(255), nullable=False),
        sa.Column('location_type', sa.String(20)),
        sa.Column('employment_type', sa.String(20)),
        sa.Column('experience_level', sa.String(20)),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('short_description', sa.Text()),
        sa.Column('requirements', postgresql.JSONB()),
        sa.Column('responsibilities', postgresql.JSONB()),
        sa.Column('benefits', postgresql.JSONB()),
        sa.Column('salary', postgresql.JSONB()),
        sa.Column('url', sa.String(1000), nullable=False),
        sa.Column('source', sa.String(100)),
        sa.Column('posted_date', sa.Date()),
        sa.Column('expires_date', sa.Date()),
        sa.Column('match_score', sa.Integer(), nullable=False),
        sa.Column('why_this_job_fits', sa.Text(), nullable=False),
        sa.Column('match_analysis', postgresql.JSONB(), nullable=False),
        sa.Column('applied', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('applied_date', sa.DateTime(timezone=True)),
        sa.Column('application_status', sa.String(20), nullable=False, server_default='not_applied'),
        sa.Column('application_notes', sa.Text()),
        sa.Column('is_saved', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_hidden', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('user_rating', sa.Integer()),
        sa.Column('user_notes', sa.Text()),
        *_timestamps(),
        sa.CheckConstraint('match_score >= 0 AND match_score <= 100', name='ck_job_match_score'),
        sa.CheckConstraint('user_rating >= 1 AND user_rating <= 5', name='ck_job_match_rating'),
    )
    op.create_index('ix_job_match_user_id', 'job_match', ['user_id'])
    op.create_index('ix_job_match_resume_id', 'job_match', ['resume_id'])
    op.create_index('ix_job_match_job_title', 'job_match', ['job_title'])
    op.create_index('ix_job_match_company', 'job_match', ['company'])
    op.create_index('ix_job_match_match_score', 'job_match', ['match_score'])
    op.create_index('ix_job_match_applied', 'job_match', ['applied'])
    op.create_index('ix_job_match_created_at', 'job_match', ['created_at'])
    op.create_index('idx_job_match_user_score', 'job_match', ['user_id', 'match_score'])
    op.create_index('idx_job_match_user_status', 'job_match', ['user_id', 'application_status'])
    op.create_index('idx_job_match_company_title', 'job_match', ['company', 'job_title'])

    # 4. interview_prep
    op.create_table(
        'interview_prep',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('user.id', ondelete='CASCADE'), nullable=False),
        sa.Column('job_match_id', sa.Uuid(), sa.ForeignKey('job_match.id', ondelete='SET NULL')),
        sa.Column('company', sa.String(255), nullable=False),
        sa.Column('role', sa.String(255), nullable=False),
        sa.Column('technologies', postgresql.JSONB(), nullable=False),
        sa.Column('experience_level', sa.String(20)),
        sa.Column('company_info', postgresql.JSONB()),
        sa.Column('role_requirements', sa.Text()),
        sa.Column('questions_json', postgresql.JSONB(), nullable=False),
        sa.Column('question_stats', postgresql.JSONB(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='draft'),
        sa.Column('generated_at', sa.DateTime(timezone=True)),
        sa.Column('completed_at', sa.DateTime(timezone=True)),
        sa.Column('progress', postgresql.JSONB(), nullable=False),
        sa.Column('practice_sessions', postgresql.JSONB(), nullable=False),
        sa.Column('user_notes', sa.Text()),
        sa.Column('target_date', sa.Date()),
        sa.Column('ai_model', sa.String(100)),
        sa.Column('generation_prompt', sa.Text()),
        *_timestamps(),
    )
    op.create_index('ix_interview_prep_user_id', 'interview_prep', ['user_id'])
    op.create_index('ix_interview_prep_company', 'interview_prep', ['company'])
    op.create_index('ix_interview_prep_status', 'interview_prep', ['status'])
    op.create_index('ix_interview_prep_created_at', 'interview_prep', ['created_at'])
    op.create_index('idx_interview_prep_user_status', 'interview_prep', ['user_id', 'status'])
    op.create_index('idx_interview_prep_user_company_role', 'interview_prep', ['user_id', 'company', 'role'])


def downgrade() -> None:
    op.drop_table('interview_prep')
    op.drop_table('job_match')
    op.drop_constraint('fk_user_active_resume', 'user', type_='foreignkey')
    op.drop_table('resume')
    op.drop_table('user')
