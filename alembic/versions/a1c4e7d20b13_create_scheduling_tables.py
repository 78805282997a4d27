"""create scheduling tables

Revision ID: a1c4e7d20b13
Revises:
Create Date: 2026-01-05 10:12:44.318205

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = 'a1c4e7d20b13'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""

    # 1. Providers, employees and services
    op.create_table(
        'providers',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('business_name', sa.String(200), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'))
    )
    op.create_index('ix_providers_user_id', 'providers', ['user_id'])

    op.create_table(
        'employees',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('provider_id', sa.String(36), sa.ForeignKey('providers.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.String(36), nullable=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('custom_schedule_enabled', sa.Boolean(), server_default=sa.false()),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'))
    )
    op.create_index('ix_employees_provider_id', 'employees', ['provider_id'])

    op.create_table(
        'services',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('provider_id', sa.String(36), sa.ForeignKey('providers.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'))
    )
    op.create_index('ix_services_provider_id', 'services', ['provider_id'])
    op.create_index('ix_services_is_active', 'services', ['is_active'])

    # 2. Weekly hours (weekday 0 = Sunday)
    op.create_table(
        'availabilities',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('provider_id', sa.String(36), sa.ForeignKey('providers.id', ondelete='CASCADE')),
        sa.Column('weekday', sa.Integer(), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=False),
        sa.Column('end_time', sa.Time(), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true())
    )
    op.create_index('ix_availabilities_provider_id', 'availabilities', ['provider_id'])

    op.create_table(
        'employee_availabilities',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('employee_id', sa.String(36), sa.ForeignKey('employees.id', ondelete='CASCADE')),
        sa.Column('day_of_week', sa.Integer(), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=False),
        sa.Column('end_time', sa.Time(), nullable=False),
        sa.Column('is_available', sa.Boolean(), server_default=sa.true())
    )
    op.create_index('ix_employee_availabilities_employee_id', 'employee_availabilities', ['employee_id'])

    # 3. Scheduling policy
    op.create_table(
        'provider_settings',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('provider_id', sa.String(36), sa.ForeignKey('providers.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('buffer_before_minutes', sa.Integer(), nullable=True),
        sa.Column('buffer_after_minutes', sa.Integer(), nullable=True),
        sa.Column('allow_overlaps', sa.Boolean(), server_default=sa.false()),
        sa.Column('cancellation_policy_hours', sa.Integer(), nullable=True),
        sa.Column('cancellation_policy_message', sa.Text(), nullable=True),
        sa.Column('reminder_lead_time_minutes', sa.Integer(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'))
    )

    # 4. Appointments
    op.create_table(
        'appointments',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('client_id', sa.String(36), nullable=False),
        sa.Column('provider_id', sa.String(36), sa.ForeignKey('providers.id'), nullable=False),
        sa.Column('service_id', sa.String(36), sa.ForeignKey('services.id'), nullable=False),
        sa.Column('employee_id', sa.String(36), sa.ForeignKey('employees.id'), nullable=True),
        sa.Column('appointment_date', sa.Date(), nullable=False),
        sa.Column('appointment_time', sa.Time(), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('cancelled_at', sa.DateTime(timezone=True), nullable=True)
    )
    op.create_index('ix_appointments_client_id', 'appointments', ['client_id'])
    op.create_index('ix_appointments_employee_id', 'appointments', ['employee_id'])
    op.create_index(
        'ix_appointments_provider_date_status',
        'appointments',
        ['provider_id', 'appointment_date', 'status']
    )

    # 5. Notifications and reminder log
    op.create_table(
        'notifications',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('appointment_id', sa.String(36), sa.ForeignKey('appointments.id'), nullable=True),
        sa.Column('event', sa.String(50), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('body', sa.Text(), nullable=False),
        sa.Column('data', sa.JSON(), nullable=True),
        sa.Column('is_read', sa.Boolean(), server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'))
    )
    op.create_index('ix_notifications_user_id', 'notifications', ['user_id'])

    op.create_table(
        'appointment_reminder_logs',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('appointment_id', sa.String(36), sa.ForeignKey('appointments.id'), nullable=False),
        sa.Column('provider_id', sa.String(36), nullable=False),
        sa.Column('client_id', sa.String(36), nullable=False),
        sa.Column('channel', sa.String(20), nullable=False, server_default='in_app'),
        sa.Column('lead_minutes', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'))
    )
    op.create_index('ix_appointment_reminder_logs_appointment_id', 'appointment_reminder_logs', ['appointment_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_appointment_reminder_logs_appointment_id', table_name='appointment_reminder_logs')
    op.drop_table('appointment_reminder_logs')
    op.drop_index('ix_notifications_user_id', table_name='notifications')
    op.drop_table('notifications')
    op.drop_index('ix_appointments_provider_date_status', table_name='appointments')
    op.drop_index('ix_appointments_employee_id', table_name='appointments')
    op.drop_index('ix_appointments_client_id', table_name='appointments')
    op.drop_table('appointments')
    op.drop_table('provider_settings')
    op.drop_index('ix_employee_availabilities_employee_id', table_name='employee_availabilities')
    op.drop_table('employee_availabilities')
    op.drop_index('ix_availabilities_provider_id', table_name='availabilities')
    op.drop_table('availabilities')
    op.drop_index('ix_services_is_active', table_name='services')
    op.drop_index('ix_services_provider_id', table_name='services')
    op.drop_table('services')
    op.drop_index('ix_employees_provider_id', table_name='employees')
    op.drop_table('employees')
    op.drop_index('ix_providers_user_id', table_name='providers')
    op.drop_table('providers')
