"""create_queue_tables

Revision ID: 6b1f0c2e9a41
Revises:
Create Date: 2026-10-18 10:12:44.517302

Creates the three independent queue relations:
- queue_entries: signups with their display position and boost state
- drops: scheduled sales the queue counts down to
- settings: single-row Instagram boost configuration
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '6b1f0c2e9a41'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create queue_entries, drops and settings."""
    op.create_table(
        'queue_entries',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(32), nullable=True),
        sa.Column('notifications', sa.Boolean, nullable=False, server_default='false'),
        sa.Column('position', sa.Integer, nullable=False),
        sa.Column('instagram_username', sa.String(64), nullable=True),
        sa.Column('instagram_boost_used', sa.Boolean, nullable=False, server_default='false'),
        sa.Column(
            'joined_at',
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint('position >= 1', name='ck_queue_entries_position_positive'),
    )
    op.create_index('ix_queue_entries_email', 'queue_entries', ['email'], unique=True)
    op.create_index('ix_queue_entries_position', 'queue_entries', ['position'])

    op.create_table(
        'drops',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('drop_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('is_active', sa.Boolean, nullable=False, server_default='true'),
        sa.Column('max_queue_size', sa.Integer, nullable=False, server_default='300'),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )

    op.create_table(
        'settings',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('instagram_post_url', sa.Text, nullable=True),
        sa.Column('instagram_boost_enabled', sa.Boolean, nullable=False, server_default='false'),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            'updated_at',
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )


def downgrade() -> None:
    """Drop the queue tables."""
    op.drop_table('settings')
    op.drop_table('drops')
    op.drop_index('ix_queue_entries_position', table_name='queue_entries')
    op.drop_index('ix_queue_entries_email', table_name='queue_entries')
    op.drop_table('queue_entries')
