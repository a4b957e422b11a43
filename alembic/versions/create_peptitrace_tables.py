"""create peptitrace tables

Revision ID: 3c1f9a7d2b10
Revises:
Create Date: 2026-10-19 10:12:41

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c1f9a7d2b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=16), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False),
        sa.Column('moderator_notes', sa.Text(), nullable=True),
        sa.Column('approval_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('demographics', sa.JSON(), nullable=False),
        sa.Column('preferences', sa.JSON(), nullable=False),
        sa.Column('refresh_token_id', sa.String(length=64), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('profile_updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('refresh_token_id'),
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_status', 'users', ['status'])

    op.create_table(
        'peptides',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('peptide_sequence', sa.Text(), nullable=False),
        sa.Column('category', sa.String(length=64), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('detailed_description', sa.Text(), nullable=False),
        sa.Column('mechanism', sa.Text(), nullable=False),
        sa.Column('common_dosage', sa.String(length=120), nullable=False),
        sa.Column('common_frequency', sa.String(length=120), nullable=False),
        sa.Column('common_effects', sa.JSON(), nullable=False),
        sa.Column('side_effects', sa.JSON(), nullable=False),
        sa.Column('dosage_ranges', sa.JSON(), nullable=False),
        sa.Column('timeline', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_peptides_name', 'peptides', ['name'], unique=True)
    op.create_index('ix_peptides_category', 'peptides', ['category'])

    op.create_table(
        'experiences',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=True),
        sa.Column('peptide_id', sa.Uuid(), nullable=False),
        sa.Column('peptide_name', sa.String(length=120), nullable=False),
        sa.Column('tracking_id', sa.String(length=32), nullable=False),
        sa.Column('dosage', sa.String(length=120), nullable=False),
        sa.Column('frequency', sa.String(length=32), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('route_of_administration', sa.String(length=32), nullable=False),
        sa.Column('primary_purpose', sa.JSON(), nullable=False),
        sa.Column('demographics', sa.JSON(), nullable=False),
        sa.Column('outcomes', sa.JSON(), nullable=False),
        sa.Column('effects', sa.JSON(), nullable=False),
        sa.Column('timeline', sa.String(length=32), nullable=False),
        sa.Column('story', sa.Text(), nullable=True),
        sa.Column('stack', sa.JSON(), nullable=False),
        sa.Column('sourcing', sa.JSON(), nullable=True),
        sa.Column('vendor', sa.JSON(), nullable=True),
        sa.Column('helpful_votes', sa.Integer(), nullable=False),
        sa.Column('total_votes', sa.Integer(), nullable=False),
        sa.Column('lifecycle', sa.String(length=16), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('duration >= 1', name='ck_experiences_duration_positive'),
        sa.CheckConstraint('helpful_votes >= 0', name='ck_experiences_helpful_votes'),
        sa.CheckConstraint('total_votes >= 0', name='ck_experiences_total_votes'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['peptide_id'], ['peptides.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_experiences_user_id', 'experiences', ['user_id'])
    op.create_index('ix_experiences_peptide_id', 'experiences', ['peptide_id'])
    op.create_index('ix_experiences_tracking_id', 'experiences', ['tracking_id'], unique=True)
    op.create_index('ix_experiences_lifecycle', 'experiences', ['lifecycle'])
    op.create_index('ix_experiences_created_at', 'experiences', ['created_at'])
    op.create_index('ix_experiences_peptide_created', 'experiences', ['peptide_id', 'created_at'])
    op.create_index('ix_experiences_user_created', 'experiences', ['user_id', 'created_at'])

    op.create_table(
        'votes',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('experience_id', sa.Uuid(), nullable=False),
        sa.Column('vote_type', sa.String(length=16), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['experience_id'], ['experiences.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'experience_id', name='uq_votes_user_experience'),
    )
    op.create_index('ix_votes_user_id', 'votes', ['user_id'])
    op.create_index('ix_votes_experience_id', 'votes', ['experience_id'])

    op.create_table(
        'effects',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('type', sa.String(length=16), nullable=False),
        sa.Column('category', sa.String(length=32), nullable=False),
        sa.Column('severity', sa.String(length=16), nullable=False),
        sa.Column('frequency', sa.String(length=16), nullable=False),
        sa.Column('is_common', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )
    op.create_index('ix_effects_type', 'effects', ['type'])
    op.create_index('ix_effects_type_category', 'effects', ['type', 'category'])


def downgrade() -> None:
    op.drop_index('ix_effects_type_category', table_name='effects')
    op.drop_index('ix_effects_type', table_name='effects')
    op.drop_table('effects')

    op.drop_index('ix_votes_experience_id', table_name='votes')
    op.drop_index('ix_votes_user_id', table_name='votes')
    op.drop_table('votes')

    op.drop_index('ix_experiences_user_created', table_name='experiences')
    op.drop_index('ix_experiences_peptide_created', table_name='experiences')
    op.drop_index('ix_experiences_created_at', table_name='experiences')
    op.drop_index('ix_experiences_lifecycle', table_name='experiences')
    op.drop_index('ix_experiences_tracking_id', table_name='experiences')
    op.drop_index('ix_experiences_peptide_id', table_name='experiences')
    op.drop_index('ix_experiences_user_id', table_name='experiences')
    op.drop_table('experiences')

    op.drop_index('ix_peptides_category', table_name='peptides')
    op.drop_index('ix_peptides_name', table_name='peptides')
    op.drop_table('peptides')

    op.drop_index('ix_users_status', table_name='users')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_index('ix_users_username', table_name='users')
    op.drop_table('users')
