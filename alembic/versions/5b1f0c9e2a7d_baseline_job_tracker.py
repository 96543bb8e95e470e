"""baseline_job_tracker

Revision ID: 5b1f0c9e2a7d
Revises: 
Create Date: 2026-10-19 09:12:44.118204

Creates users, job_applications and job_interviews. Idempotent: tables that
already exist are left untouched.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '5b1f0c9e2a7d'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def table_exists(table_name: str) -> bool:
    """Check if a table exists in the database."""
    bind = op.get_bind()
    inspector = inspect(bind)
    return table_name in inspector.get_table_names()


def upgrade() -> None:
    if not table_exists('users'):
        op.create_table('users',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('first_name', sa.String(length=50), nullable=False),
            sa.Column('last_name', sa.String(length=50), nullable=False),
            sa.Column('email', sa.String(), nullable=False),
            sa.Column('password_hash', sa.String(), nullable=False),
            sa.Column('phone', sa.String(length=20), nullable=True),
            sa.Column('location', sa.String(length=100), nullable=True),
            sa.Column('bio', sa.Text(), nullable=True),
            sa.Column('skills', sa.JSON(), nullable=False),
            sa.Column('experience', sa.String(), nullable=True),
            sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
            sa.Column('last_login', sa.DateTime(), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.Column('updated_at', sa.DateTime(), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
        op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    if not table_exists('job_applications'):
        op.create_table('job_applications',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('title', sa.String(length=100), nullable=False),
            sa.Column('company', sa.String(length=100), nullable=False),
            sa.Column('location', sa.String(length=100), nullable=True),
            sa.Column('status', sa.String(), nullable=False, server_default='applied'),
            sa.Column('salary', sa.String(length=50), nullable=True),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('requirements', sa.Text(), nullable=True),
            sa.Column('application_date', sa.DateTime(), nullable=False),
            sa.Column('job_url', sa.String(), nullable=True),
            sa.Column('contact_person', sa.String(length=100), nullable=True),
            sa.Column('contact_email', sa.String(), nullable=True),
            sa.Column('contact_phone', sa.String(length=20), nullable=True),
            sa.Column('notes', sa.Text(), nullable=True),
            sa.Column('tags', sa.JSON(), nullable=False),
            sa.Column('priority', sa.String(), nullable=False, server_default='medium'),
            sa.Column('follow_up_date', sa.DateTime(), nullable=True),
            sa.Column('attachments', sa.JSON(), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.Column('updated_at', sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_job_applications_id'), 'job_applications', ['id'], unique=False)
        op.create_index(op.f('ix_job_applications_user_id'), 'job_applications', ['user_id'], unique=False)
        op.create_index(op.f('ix_job_applications_company'), 'job_applications', ['company'], unique=False)
        op.create_index('idx_jobapp_user_status', 'job_applications', ['user_id', 'status'], unique=False)
        op.create_index('idx_jobapp_user_appdate', 'job_applications', ['user_id', 'application_date'], unique=False)
        op.create_index('idx_jobapp_user_company', 'job_applications', ['user_id', 'company'], unique=False)

    if not table_exists('job_interviews'):
        op.create_table('job_interviews',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('job_id', sa.Integer(), nullable=False),
            sa.Column('date', sa.DateTime(), nullable=False),
            sa.Column('type', sa.String(), nullable=False),
            sa.Column('notes', sa.Text(), nullable=True),
            sa.Column('outcome', sa.String(), nullable=False, server_default='pending'),
            sa.ForeignKeyConstraint(['job_id'], ['job_applications.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_job_interviews_id'), 'job_interviews', ['id'], unique=False)
        op.create_index(op.f('ix_job_interviews_job_id'), 'job_interviews', ['job_id'], unique=False)
        op.create_index('idx_interview_type_outcome', 'job_interviews', ['type', 'outcome'], unique=False)


def downgrade() -> None:
    op.drop_table('job_interviews')
    op.drop_table('job_applications')
    op.drop_table('users')
