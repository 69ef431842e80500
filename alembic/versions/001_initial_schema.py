"""Initial schema

Revision ID: 001
Revises: 
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

from app.core.config import settings


# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Create calls table
    op.create_table(
        settings.calls_table,
        sa.Column('call_id', sa.String(), nullable=False),
        sa.Column('caller_id', sa.String(), nullable=True),
        sa.Column('agent_a_id', sa.String(), nullable=True),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('created_at', sa.String(), nullable=False),
        sa.Column('metadata', sa.JSON(), nullable=False),
        sa.Column('latest_transcript', sa.Text(), nullable=True),
        sa.Column('last_summary_id', sa.String(), nullable=True),
        sa.Column('transfer_id', sa.String(), nullable=True),
        sa.PrimaryKeyConstraint('call_id')
    )
    op.create_index(
        op.f(f'ix_{settings.calls_table}_agent_a_id'), settings.calls_table, ['agent_a_id'], unique=False
    )

    # Create summaries table
    op.create_table(
        settings.summaries_table,
        sa.Column('summary_id', sa.String(), nullable=False),
        sa.Column('call_id', sa.String(), nullable=False),
        sa.Column('summary_text', sa.Text(), nullable=False),
        sa.Column('model', sa.String(), nullable=False),
        sa.Column('created_at', sa.String(), nullable=False),
        sa.Column('metadata', sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint('summary_id')
    )
    op.create_index(
        op.f(f'ix_{settings.summaries_table}_call_id'), settings.summaries_table, ['call_id'], unique=False
    )

    # Create transfers table
    op.create_table(
        settings.transfers_table,
        sa.Column('transfer_id', sa.String(), nullable=False),
        sa.Column('call_id', sa.String(), nullable=False),
        sa.Column('from_agent_id', sa.String(), nullable=True),
        sa.Column('to_agent', sa.String(), nullable=True),
        sa.Column('to_agent_type', sa.String(), nullable=True),
        sa.Column('transfer_room', sa.String(), nullable=True),
        sa.Column('summary_id', sa.String(), nullable=True),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('created_at', sa.String(), nullable=False),
        sa.Column('extra', sa.JSON(), nullable=False),
        sa.Column('idempotency_key', sa.String(), nullable=True),
        sa.PrimaryKeyConstraint('transfer_id'),
        sa.UniqueConstraint('idempotency_key')
    )
    op.create_index(
        op.f(f'ix_{settings.transfers_table}_call_id'), settings.transfers_table, ['call_id'], unique=False
    )

    # Create transcripts table
    op.create_table(
        settings.transcripts_table,
        sa.Column('transcript_id', sa.String(), nullable=False),
        sa.Column('call_id', sa.String(), nullable=False),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('source', sa.String(), nullable=False),
        sa.Column('created_at', sa.String(), nullable=False),
        sa.Column('metadata', sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint('transcript_id')
    )
    op.create_index(
        op.f(f'ix_{settings.transcripts_table}_call_id'), settings.transcripts_table, ['call_id'], unique=False
    )

    # Create agents table
    op.create_table(
        settings.agents_table,
        sa.Column('agent_id', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('phone_number', sa.String(), nullable=True),
        sa.Column('active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.String(), nullable=False),
        sa.Column('metadata', sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint('agent_id')
    )


def downgrade() -> None:
    op.drop_table(settings.agents_table)
    op.drop_table(settings.transcripts_table)
    op.drop_table(settings.transfers_table)
    op.drop_table(settings.summaries_table)
    op.drop_table(settings.calls_table)
