"""Seed default notification templates

Revision ID: 8e3f0b6a71c2
Revises: 5c1e7a9d2b40
Create Date: 2026-10-19 10:40:02.118734

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '8e3f0b6a71c2'
down_revision = '5c1e7a9d2b40'
branch_labels = None
depends_on = None

# Defined inline so the migration does not depend on application code
DEFAULT_TEMPLATES = [
    {
        'template_key': 'REPORT_READY',
        'name': 'Report Ready',
        'description': 'Notification when a property report is ready for download',
        'title_template': '{{report_type}} Report Ready',
        'message_template': 'Your {{report_type}} report for property {{property_name}} is now ready for download.',
        'type': 'report',
        'category': 'report',
        'priority': 'medium',
        'requires_email': True,
        'email_subject_template': 'OwnItRight: Your {{report_type}} Report is Ready',
        'email_body_template': '<h2>Your {{report_type}} Report is Ready!</h2><p>Dear Customer,</p><p>Your {{report_type}} report for the property {{property_name}} has been completed and is now ready for download.</p><p>You can access your report through your dashboard.</p><p>Thank you for choosing OwnItRight for your property advisory needs.</p>',
    },
    {
        'template_key': 'BOOKING_CONFIRMED',
        'name': 'Booking Confirmed',
        'description': 'Notification when a site visit booking is confirmed',
        'title_template': 'Site Visit Booking Confirmed',
        'message_template': 'Your site visit for {{property_name}} has been confirmed.',
        'type': 'booking',
        'category': 'booking',
        'priority': 'high',
        'requires_email': True,
        'email_subject_template': 'OwnItRight: Site Visit Confirmed - {{property_name}}',
        'email_body_template': '<h2>Site Visit Booking Confirmed</h2><p>Dear Customer,</p><p>Your site visit for {{property_name}} has been confirmed (booking {{booking_id}}).</p><p>Our representative will meet you at the property location. If you need to reschedule, please contact us at least 24 hours in advance.</p>',
    },
    {
        'template_key': 'PAYMENT_RECEIVED',
        'name': 'Payment Received',
        'description': 'Notification when a payment is successfully received',
        'title_template': 'Payment Confirmation',
        'message_template': 'We have received your payment of {{amount}} for {{service}}. Thank you!',
        'type': 'payment',
        'category': 'payment',
        'priority': 'medium',
        'requires_email': True,
        'email_subject_template': 'OwnItRight: Payment Received - {{amount}}',
        'email_body_template': '<h2>Payment Confirmation</h2><p>Dear Customer,</p><p>We have successfully received your payment of {{amount}} for {{service}}.</p><p>Thank you for your business!</p>',
    },
    {
        'template_key': 'PROPERTY_MATCH',
        'name': 'Property Match Found',
        'description': 'Notification when a property matches user criteria',
        'title_template': 'New Property Match Found',
        'message_template': 'We found a property that matches your criteria: {{property_name}} in {{location}}.',
        'type': 'property',
        'category': 'property',
        'priority': 'medium',
        'requires_email': True,
        'email_subject_template': 'OwnItRight: New Property Match - {{property_name}}',
        'email_body_template': '<h2>New Property Match Found!</h2><p>Dear Customer,</p><p><strong>{{property_name}}</strong><br>Location: {{location}}<br>Price: {{price}}<br>Type: {{property_type}}</p><p>View the property details and schedule a visit through your dashboard.</p>',
    },
    {
        'template_key': 'WELCOME_USER',
        'name': 'Welcome New User',
        'description': 'Welcome message for new users',
        'title_template': 'Welcome to OwnItRight!',
        'message_template': 'Welcome to OwnItRight! We are here to help you find the perfect property with expert guidance.',
        'type': 'info',
        'category': 'system',
        'priority': 'medium',
        'requires_email': True,
        'email_subject_template': 'Welcome to OwnItRight - Your Property Advisory Partner',
        'email_body_template': '<h2>Welcome to OwnItRight!</h2><p>Dear {{user_name}},</p><p>Thank you for joining OwnItRight, your trusted property advisory platform.</p><p>Start exploring properties and our services through your personalized dashboard.</p>',
    },
]


def upgrade():
    templates_table = sa.table(
        'notification_templates',
        sa.column('template_key', sa.String),
        sa.column('name', sa.String),
        sa.column('description', sa.Text),
        sa.column('title_template', sa.String),
        sa.column('message_template', sa.Text),
        sa.column('type', sa.String),
        sa.column('category', sa.String),
        sa.column('priority', sa.String),
        sa.column('requires_email', sa.Boolean),
        sa.column('email_subject_template', sa.String),
        sa.column('email_body_template', sa.Text),
        sa.column('is_active', sa.Boolean),
    )
    conn = op.get_bind()
    existing = {
        row[0] for row in conn.execute(sa.text("SELECT template_key FROM notification_templates"))
    }
    rows = [
        {**template, 'is_active': True}
        for template in DEFAULT_TEMPLATES
        if template['template_key'] not in existing
    ]
    if rows:
        op.bulk_insert(templates_table, rows)


def downgrade():
    keys = ", ".join(f"'{template['template_key']}'" for template in DEFAULT_TEMPLATES)
    op.execute(f"DELETE FROM notification_templates WHERE template_key IN ({keys})")
