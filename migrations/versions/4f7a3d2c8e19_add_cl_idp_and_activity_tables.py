"""add CL, IDP and activity tables

Revision ID: 4f7a3d2c8e19
Revises: 9c2e51a0b7d4
Create Date: 2025-02-03 09:31:07.502611

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4f7a3d2c8e19'
down_revision: Union[str, None] = '9c2e51a0b7d4'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # Competency Leveling
    op.create_table(
        'cl_headers',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('employee_id', sa.Integer(), nullable=False),
        sa.Column('supervisor_id', sa.Integer(), nullable=False),
        sa.Column('department_id', sa.Integer(), nullable=False),
        sa.Column('cycle_id', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='DRAFT'),
        sa.Column('has_assistant_manager', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('idx_cl_headers_supervisor_id', 'cl_headers', ['supervisor_id'])
    op.create_index('idx_cl_headers_status', 'cl_headers', ['status'])
    op.create_index('idx_cl_headers_employee_cycle', 'cl_headers', ['employee_id', 'cycle_id'])

    op.create_table(
        'cl_items',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('cl_header_id', sa.Integer(), sa.ForeignKey('cl_headers.id', ondelete='CASCADE'), nullable=False),
        sa.Column('competency_id', sa.Integer(), sa.ForeignKey('competencies.id'), nullable=False),
        sa.Column('mplr_level', sa.Integer(), nullable=True),
        sa.Column('assigned_level', sa.Integer(), nullable=True),
        sa.Column('weight', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('justification', sa.Text(), nullable=True),
        sa.Column('score', sa.Numeric(10, 2), nullable=True),
        sa.Column('pdf_path', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('idx_cl_items_cl_header_id', 'cl_items', ['cl_header_id'])

    # Individual Development Plans
    op.create_table(
        'idp_headers',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('cl_header_id', sa.Integer(), nullable=True),
        sa.Column('employee_id', sa.Integer(), nullable=False),
        sa.Column('supervisor_id', sa.Integer(), nullable=False),
        sa.Column('cycle_id', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='DRAFT'),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('idx_idp_headers_supervisor_id', 'idp_headers', ['supervisor_id'])
    op.create_index('idx_idp_headers_status', 'idp_headers', ['status'])
    op.create_index('idx_idp_headers_cl_header_id', 'idp_headers', ['cl_header_id'])

    op.create_table(
        'idp_items',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('idp_header_id', sa.Integer(), sa.ForeignKey('idp_headers.id', ondelete='CASCADE'), nullable=False),
        sa.Column('competency_id', sa.Integer(), sa.ForeignKey('competencies.id'), nullable=False),
        sa.Column('current_level', sa.Integer(), nullable=True),
        sa.Column('target_level', sa.Integer(), nullable=True),
        sa.Column('development_activity', sa.Text(), nullable=True),
        sa.Column('development_type', sa.String(length=100), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='NOT_STARTED'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('idx_idp_items_idp_header_id', 'idp_items', ['idp_header_id'])

    # Side effects
    op.create_table(
        'notifications',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('recipient_id', sa.Integer(), nullable=False),
        sa.Column('module', sa.String(length=50), nullable=False, server_default='Competency Leveling'),
        sa.Column('event_type', sa.String(length=50), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('action_url', sa.String(length=500), nullable=True),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('read_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('idx_notifications_recipient_id_created_at', 'notifications', ['recipient_id', 'created_at'])
    op.create_index('idx_notifications_recipient_id_is_read', 'notifications', ['recipient_id', 'is_read'])

    op.create_table(
        'recent_actions',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('actor_id', sa.Integer(), nullable=False),
        sa.Column('module', sa.String(length=10), nullable=False, server_default='CL'),
        sa.Column('action_type', sa.String(length=50), nullable=False),
        sa.Column('cl_id', sa.Integer(), nullable=True),
        sa.Column('idp_id', sa.Integer(), nullable=True),
        sa.Column('employee_id', sa.Integer(), nullable=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('url', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('idx_recent_actions_actor_id_created_at', 'recent_actions', ['actor_id', 'created_at'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('idx_recent_actions_actor_id_created_at', table_name='recent_actions')
    op.drop_table('recent_actions')
    op.drop_index('idx_notifications_recipient_id_is_read', table_name='notifications')
    op.drop_index('idx_notifications_recipient_id_created_at', table_name='notifications')
    op.drop_table('notifications')
    op.drop_index('idx_idp_items_idp_header_id', table_name='idp_items')
    op.drop_table('idp_items')
    op.drop_index('idx_idp_headers_cl_header_id', table_name='idp_headers')
    op.drop_index('idx_idp_headers_status', table_name='idp_headers')
    op.drop_index('idx_idp_headers_supervisor_id', table_name='idp_headers')
    op.drop_table('idp_headers')
    op.drop_index('idx_cl_items_cl_header_id', table_name='cl_items')
    op.drop_table('cl_items')
    op.drop_index('idx_cl_headers_employee_cycle', table_name='cl_headers')
    op.drop_index('idx_cl_headers_status', table_name='cl_headers')
    op.drop_index('idx_cl_headers_supervisor_id', table_name='cl_headers')
    op.drop_table('cl_headers')
