"""create notification tables

Revision ID: 5c1e7a9d2b40
Revises:
Create Date: 2026-10-19 10:12:44.381920

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '5c1e7a9d2b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

NOTIFICATION_TYPES = ('info', 'success', 'warning', 'error', 'property', 'report', 'booking', 'payment', 'system')
CATEGORIES = ('property', 'report', 'booking', 'payment', 'lead', 'system', 'promotion')
PRIORITIES = ('low', 'medium', 'high', 'urgent')


def _enum(values, name):
    return sa.Enum(*values, name=name, native_enum=False)


def upgrade() -> None:
    op.create_table(
        'notifications',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=True),
        sa.Column('user_type', _enum(('user', 'all', 'admin'), 'notification_user_type'), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('type', _enum(NOTIFICATION_TYPES, 'notification_type'), nullable=False),
        sa.Column('category', _enum(CATEGORIES, 'notification_category'), nullable=False),
        sa.Column('priority', _enum(PRIORITIES, 'notification_priority'), nullable=False),
        sa.Column('related_entity_type', _enum(('property', 'report', 'booking', 'payment', 'lead', 'user', 'system'), 'notification_entity_type'), nullable=True),
        sa.Column('related_entity_id', sa.String(), nullable=True),
        sa.Column('action_url', sa.String(), nullable=True),
        sa.Column('action_text', sa.String(), nullable=True),
        sa.Column('metadata', sa.JSON(), nullable=True),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('read_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('is_archived', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('email_sent', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('email_sent_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_notifications_id'), 'notifications', ['id'], unique=False)
    op.create_index(op.f('ix_notifications_user_id'), 'notifications', ['user_id'], unique=False)
    op.create_index(op.f('ix_notifications_created_at'), 'notifications', ['created_at'], unique=False)

    op.create_table(
        'notification_templates',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('template_key', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('title_template', sa.String(), nullable=False),
        sa.Column('message_template', sa.Text(), nullable=False),
        sa.Column('email_subject_template', sa.String(), nullable=True),
        sa.Column('email_body_template', sa.Text(), nullable=True),
        sa.Column('requires_email', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('type', _enum(NOTIFICATION_TYPES, 'notification_type'), nullable=False),
        sa.Column('category', _enum(CATEGORIES, 'notification_category'), nullable=False),
        sa.Column('priority', _enum(PRIORITIES, 'notification_priority'), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_notification_templates_id'), 'notification_templates', ['id'], unique=False)
    op.create_index(op.f('ix_notification_templates_template_key'), 'notification_templates', ['template_key'], unique=True)

    op.create_table(
        'notification_preferences',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('email_notifications', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('push_notifications', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('sms_notifications', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('property_updates', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('report_notifications', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('booking_notifications', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('payment_notifications', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('lead_notifications', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('system_notifications', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('promotional_notifications', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('digest_frequency', _enum(('immediate', 'daily', 'weekly', 'never'), 'notification_digest_frequency'), nullable=False, server_default='immediate'),
        sa.Column('quiet_hours_start', sa.String(), nullable=True),
        sa.Column('quiet_hours_end', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_notification_preferences_id'), 'notification_preferences', ['id'], unique=False)
    op.create_index(op.f('ix_notification_preferences_user_id'), 'notification_preferences', ['user_id'], unique=True)


def downgrade() -> None:
    op.drop_index(op.f('ix_notification_preferences_user_id'), table_name='notification_preferences')
    op.drop_index(op.f('ix_notification_preferences_id'), table_name='notification_preferences')
    op.drop_table('notification_preferences')
    op.drop_index(op.f('ix_notification_templates_template_key'), table_name='notification_templates')
    op.drop_index(op.f('ix_notification_templates_id'), table_name='notification_templates')
    op.drop_table('notification_templates')
    op.drop_index(op.f('ix_notifications_created_at'), table_name='notifications')
    op.drop_index(op.f('ix_notifications_user_id'), table_name='notifications')
    op.drop_index(op.f('ix_notifications_id'), table_name='notifications')
    op.drop_table('notifications')
