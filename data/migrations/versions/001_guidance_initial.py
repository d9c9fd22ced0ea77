"""Initial migration: sessions and interactions

Revision ID: 001_guidance_initial
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_guidance_initial'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'sessions',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_name', sa.Text(), nullable=True),
        sa.Column('ethnic_group', sa.Text(), nullable=True),
        sa.Column('education_level', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # append-only log; no ON DELETE rule since sessions are never deleted
    op.create_table(
        'interactions',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('session_id', sa.Integer(), nullable=False),
        sa.Column('feature_title', sa.Text(), nullable=True),
        sa.Column('user_input', sa.Text(), nullable=True),
        sa.Column('ai_output', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_foreign_key('fk_interactions_session_id', 'interactions', 'sessions', ['session_id'], ['id'])
    op.create_index('ix_interactions_session_id', 'interactions', ['session_id'])


def downgrade() -> None:
    op.drop_index('ix_interactions_session_id', table_name='interactions')
    op.drop_table('interactions')
    op.drop_table('sessions')
