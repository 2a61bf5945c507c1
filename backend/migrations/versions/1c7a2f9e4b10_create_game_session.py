"""create game_session table

Revision ID: 1c7a2f9e4b10
Revises:
Create Date: 2026-10-19 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '1c7a2f9e4b10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'game_session',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('game_code', sa.String(length=4), nullable=True),
        sa.Column('score', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('pets_unlocked', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('assignments', sa.Text(), nullable=True),
        sa.Column('round_history', sa.Text(), nullable=True),
        sa.Column('status_message', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('game_session') as batch_op:
        batch_op.create_index(batch_op.f('ix_game_session_game_code'), ['game_code'], unique=True)


def downgrade():
    with op.batch_alter_table('game_session') as batch_op:
        batch_op.drop_index(batch_op.f('ix_game_session_game_code'))
    op.drop_table('game_session')
