"""create_profile_and_favorites

Revision ID: 4c2e9a7d1f03
Revises:
Create Date: 2026-10-19 09:12:44.103512

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '4c2e9a7d1f03'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create profiles, user_preferences, smells and user_smells tables."""
    op.create_table('profiles',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=True),
        sa.Column('image', sa.String(length=500), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('location', sa.String(length=100), nullable=True),
        sa.Column('website', sa.String(length=500), nullable=True),
        sa.Column('github_url', sa.String(length=500), nullable=True),
        sa.Column('linkedin_url', sa.String(length=500), nullable=True),
        sa.Column('twitter_url', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )
    op.create_table('user_preferences',
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('theme', sa.String(length=10), nullable=False, server_default='auto'),
        sa.Column('default_difficulty', sa.String(length=20), nullable=False, server_default='beginner'),
        sa.Column('email_updates', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('progress_reminders', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('new_smells', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('weekly_digest', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('profile_visibility', sa.String(length=10), nullable=False, server_default='public'),
        sa.Column('show_progress', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('allow_analytics', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint("theme IN ('light', 'dark', 'auto')", name='ck_user_preferences_theme'),
        sa.CheckConstraint(
            "default_difficulty IN ('beginner', 'intermediate', 'advanced')",
            name='ck_user_preferences_default_difficulty',
        ),
        sa.CheckConstraint(
            "profile_visibility IN ('public', 'private')",
            name='ck_user_preferences_profile_visibility',
        ),
        sa.ForeignKeyConstraint(['user_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('user_id'),
    )
    # Catalog rows are written by the catalog service; created here so the
    # favorites foreign key has a target.
    op.create_table('smells',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('category', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('difficulty', sa.String(length=20), nullable=False, server_default='beginner'),
        sa.Column('tags', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('is_published', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('title'),
    )
    op.create_table('user_smells',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('smell_id', sa.String(length=64), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['smell_id'], ['smells.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'smell_id', name='uq_user_smells_user_smell'),
    )
    op.create_index('ix_user_smells_user_id', 'user_smells', ['user_id'], unique=False)
    # Newest-first listing per user
    op.create_index('ix_user_smells_user_created', 'user_smells', ['user_id', 'created_at'], unique=False)


def downgrade() -> None:
    """Drop profile and favorites tables."""
    op.drop_index('ix_user_smells_user_created', table_name='user_smells')
    op.drop_index('ix_user_smells_user_id', table_name='user_smells')
    op.drop_table('user_smells')
    op.drop_table('smells')
    op.drop_table('user_preferences')
    op.drop_table('profiles')
