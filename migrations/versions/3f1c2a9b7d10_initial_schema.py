"""Initial schema: jobs, payouts, notifications

Revision ID: 3f1c2a9b7d10
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9b7d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'jobs',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('professional_id', sa.Uuid(), nullable=True),
        sa.Column('title', sa.String(length=100), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.String(length=50), nullable=False),
        sa.Column('priority', sa.String(length=20), nullable=False, server_default='medium'),
        sa.Column('scheduled_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('scheduled_time', sa.String(length=20), nullable=False),
        sa.Column('estimated_duration', sa.Float(), nullable=False, server_default='2'),
        sa.Column('location', sa.JSON(), nullable=False),
        sa.Column('location_point', sa.JSON(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('status_history', sa.JSON(), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('cancelled_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('budget', sa.JSON(), nullable=True),
        sa.Column('fixed_rate', sa.Float(), nullable=True),
        sa.Column('final_price', sa.Float(), nullable=True),
        sa.Column('tip_amount', sa.Float(), nullable=False, server_default='0'),
        sa.Column('commission', sa.JSON(), nullable=True),
        sa.Column('provider_earnings', sa.Float(), nullable=True),
        sa.Column('invoice', sa.JSON(), nullable=True),
        sa.Column('invoice_number', sa.String(length=50), nullable=True),
        sa.Column('invoice_due_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('invoice_payment_status', sa.String(length=20), nullable=True),
        sa.Column('payment_status', sa.String(length=30), nullable=False, server_default='pending'),
        sa.Column('payment_method', sa.String(length=20), nullable=True),
        sa.Column('payment_provider', sa.String(length=20), nullable=False, server_default='none'),
        sa.Column('gateway_order_id', sa.String(length=255), nullable=True),
        sa.Column('gateway_payment_id', sa.String(length=255), nullable=True),
        sa.Column('gateway_signature', sa.String(length=255), nullable=True),
        sa.Column('paid_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('cash_payment_details', sa.JSON(), nullable=True),
        sa.Column('declined_by', sa.JSON(), nullable=False),
        sa.Column('messages', sa.JSON(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=True),
        sa.Column('review', sa.Text(), nullable=True),
        sa.Column('version', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('invoice_number'),
    )
    op.create_index('ix_jobs_user_id', 'jobs', ['user_id'])
    op.create_index('ix_jobs_professional_id', 'jobs', ['professional_id'])
    op.create_index('ix_jobs_category', 'jobs', ['category'])
    op.create_index('ix_jobs_status', 'jobs', ['status'])
    op.create_index('ix_jobs_payment_status', 'jobs', ['payment_status'])
    op.create_index('ix_jobs_invoice_due_date', 'jobs', ['invoice_due_date'])
    op.create_index('ix_jobs_invoice_payment_status', 'jobs', ['invoice_payment_status'])

    op.create_table(
        'payouts',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('professional_id', sa.Uuid(), nullable=False),
        sa.Column('amount', sa.Float(), nullable=False),
        sa.Column('processing_fee', sa.Float(), nullable=False, server_default='0'),
        sa.Column('net_amount', sa.Float(), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False, server_default='INR'),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('bank_account', sa.JSON(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('failure_reason', sa.Text(), nullable=True),
        sa.Column('transaction_id', sa.String(length=255), nullable=True),
        sa.Column('requested_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('processed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_payouts_professional_id', 'payouts', ['professional_id'])
    op.create_index('ix_payouts_status', 'payouts', ['status'])

    op.create_table(
        'notifications',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('recipient_id', sa.Uuid(), nullable=False),
        sa.Column('recipient_model', sa.String(length=20), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('title', sa.String(length=100), nullable=False),
        sa.Column('message', sa.String(length=500), nullable=False),
        sa.Column('related_job_id', sa.Uuid(), nullable=True),
        sa.Column('priority', sa.String(length=10), nullable=False, server_default='medium'),
        sa.Column('action_data', sa.JSON(), nullable=True),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('read_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_notifications_recipient_id', 'notifications', ['recipient_id'])
    op.create_index('ix_notifications_type', 'notifications', ['type'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_notifications_type', table_name='notifications')
    op.drop_index('ix_notifications_recipient_id', table_name='notifications')
    op.drop_table('notifications')

    op.drop_index('ix_payouts_status', table_name='payouts')
    op.drop_index('ix_payouts_professional_id', table_name='payouts')
    op.drop_table('payouts')

    op.drop_index('ix_jobs_invoice_payment_status', table_name='jobs')
    op.drop_index('ix_jobs_invoice_due_date', table_name='jobs')
    op.drop_index('ix_jobs_payment_status', table_name='jobs')
    op.drop_index('ix_jobs_status', table_name='jobs')
    op.drop_index('ix_jobs_category', table_name='jobs')
    op.drop_index('ix_jobs_professional_id', table_name='jobs')
    op.drop_index('ix_jobs_user_id', table_name='jobs')
    op.drop_table('jobs')
