"""Initial memos schema: memos, tags, shortcuts

Revision ID: d1e2f3a4b5c6
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'd1e2f3a4b5c6'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'memos',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('creator_id', sa.Integer(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False, server_default=''),
        sa.Column('visibility', sa.String(20), nullable=False, server_default='PRIVATE'),
        sa.Column('row_status', sa.String(20), nullable=False, server_default='NORMAL'),
        sa.Column('pinned', sa.Boolean(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_memos_creator_id', 'memos', ['creator_id'])
    op.create_index('ix_memos_row_status', 'memos', ['row_status'])

    op.create_table(
        'tags',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('creator_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('creator_id', 'name', name='uq_tags_creator_name'),
    )
    op.create_index('ix_tags_creator_id', 'tags', ['creator_id'])
    op.create_index('ix_tags_name', 'tags', ['name'])

    # Pin state is an explicit column; the API derives rowStatus=ARCHIVED from it
    op.create_table(
        'shortcuts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('creator_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('payload', sa.Text(), nullable=False, server_default='[]'),
        sa.Column('pinned', sa.Boolean(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_shortcuts_creator_id', 'shortcuts', ['creator_id'])


def downgrade() -> None:
    op.drop_index('ix_shortcuts_creator_id', table_name='shortcuts')
    op.drop_table('shortcuts')
    op.drop_index('ix_tags_name', table_name='tags')
    op.drop_index('ix_tags_creator_id', table_name='tags')
    op.drop_table('tags')
    op.drop_index('ix_memos_row_status', table_name='memos')
    op.drop_index('ix_memos_creator_id', table_name='memos')
    op.drop_table('memos')
