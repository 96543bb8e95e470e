"""add_user_preferences_education_resume

Revision ID: 8c3d4e1f6a20
Revises: 5b1f0c9e2a7d
Create Date: 2026-10-26 14:03:51.520913

Adds users.preferences, users.resume and the user_education table.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '8c3d4e1f6a20'
down_revision: Union[str, None] = '5b1f0c9e2a7d'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def table_exists(table_name: str) -> bool:
    """Check if a table exists in the database."""
    bind = op.get_bind()
    inspector = inspect(bind)
    return table_name in inspector.get_table_names()


def column_exists(table_name: str, column_name: str) -> bool:
    bind = op.get_bind()
    inspector = inspect(bind)
    return column_name in [c['name'] for c in inspector.get_columns(table_name)]


def upgrade() -> None:
    if not column_exists('users', 'preferences'):
        op.add_column('users', sa.Column('preferences', sa.JSON(), nullable=False, server_default='{}'))
    if not column_exists('users', 'resume'):
        op.add_column('users', sa.Column('resume', sa.JSON(), nullable=True))

    if not table_exists('user_education'):
        op.create_table('user_education',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('degree', sa.String(length=100), nullable=False),
            sa.Column('institution', sa.String(length=100), nullable=False),
            sa.Column('year', sa.Integer(), nullable=False),
            sa.Column('gpa', sa.Float(), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_user_education_id'), 'user_education', ['id'], unique=False)
        op.create_index(op.f('ix_user_education_user_id'), 'user_education', ['user_id'], unique=False)


def downgrade() -> None:
    op.drop_table('user_education')
    op.drop_column('users', 'resume')
    op.drop_column('users', 'preferences')
