"""Initial HR schema

Revision ID: 3f1c2a9b7d10
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# Revision identifiers used by Alembic
revision: str = '3f1c2a9b7d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

REQUEST_STATUS = ('Pending', 'Approved', 'Rejected')


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'accounts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('title', sa.String(length=50), nullable=True),
        sa.Column('first_name', sa.String(length=100), nullable=True),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        sa.Column('accept_terms', sa.Boolean(), nullable=True),
        sa.Column('role', sa.Enum('Admin', 'User', name='role'), nullable=False),
        sa.Column('verification_token', sa.String(length=255), nullable=True),
        sa.Column('verified', sa.DateTime(), nullable=True),
        sa.Column('reset_token', sa.String(length=255), nullable=True),
        sa.Column('reset_token_expires', sa.DateTime(), nullable=True),
        sa.Column('password_reset', sa.DateTime(), nullable=True),
        sa.Column('created', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated', sa.DateTime(), nullable=True),
    )
    op.create_index(op.f('ix_accounts_id'), 'accounts', ['id'], unique=False)
    op.create_index(op.f('ix_accounts_email'), 'accounts', ['email'], unique=True)
    op.create_index(op.f('ix_accounts_verification_token'), 'accounts', ['verification_token'], unique=False)
    op.create_index(op.f('ix_accounts_reset_token'), 'accounts', ['reset_token'], unique=False)

    op.create_table(
        'refresh_tokens',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('account_id', sa.Integer(), sa.ForeignKey('accounts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('token', sa.String(length=255), nullable=False),
        sa.Column('expires', sa.DateTime(), nullable=False),
        sa.Column('created', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('created_by_ip', sa.String(length=64), nullable=True),
        sa.Column('revoked', sa.DateTime(), nullable=True),
        sa.Column('revoked_by_ip', sa.String(length=64), nullable=True),
        sa.Column('replaced_by_token', sa.String(length=255), nullable=True),
    )
    op.create_index(op.f('ix_refresh_tokens_id'), 'refresh_tokens', ['id'], unique=False)
    op.create_index(op.f('ix_refresh_tokens_account_id'), 'refresh_tokens', ['account_id'], unique=False)
    op.create_index(op.f('ix_refresh_tokens_token'), 'refresh_tokens', ['token'], unique=True)

    op.create_table(
        'departments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index(op.f('ix_departments_id'), 'departments', ['id'], unique=False)
    op.create_index(op.f('ix_departments_name'), 'departments', ['name'], unique=False)

    op.create_table(
        'employees',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('employee_id', sa.String(length=50), nullable=False),
        sa.Column('position', sa.String(length=100), nullable=False),
        sa.Column('hire_date', sa.Date(), nullable=False),
        sa.Column('status', sa.Enum('Active', 'Inactive', 'OnLeave', 'Terminated', name='employeestatus'), nullable=False),
        sa.Column('job_title', sa.String(length=100), nullable=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('accounts.id', ondelete='SET NULL'), nullable=True, unique=True),
        sa.Column('department_id', sa.Integer(), sa.ForeignKey('departments.id', ondelete='SET NULL'), nullable=True),
        sa.Column('reporting_to', sa.Integer(), sa.ForeignKey('employees.id', ondelete='SET NULL'), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index(op.f('ix_employees_id'), 'employees', ['id'], unique=False)
    op.create_index(op.f('ix_employees_employee_id'), 'employees', ['employee_id'], unique=True)
    op.create_index(op.f('ix_employees_department_id'), 'employees', ['department_id'], unique=False)

    op.create_table(
        'requests',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('type', sa.Enum('Equipment', 'Leave', 'Resources', name='requesttype'), nullable=False),
        sa.Column('status', sa.Enum(*REQUEST_STATUS, name='requeststatus'), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('employee_id', sa.Integer(), sa.ForeignKey('employees.id', ondelete='SET NULL'), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index(op.f('ix_requests_id'), 'requests', ['id'], unique=False)
    op.create_index(op.f('ix_requests_employee_id'), 'requests', ['employee_id'], unique=False)

    op.create_table(
        'request_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('details', sa.Text(), nullable=True),
        sa.Column('request_id', sa.Integer(), sa.ForeignKey('requests.id', ondelete='CASCADE', onupdate='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index(op.f('ix_request_items_id'), 'request_items', ['id'], unique=False)
    op.create_index(op.f('ix_request_items_request_id'), 'request_items', ['request_id'], unique=False)

    op.create_table(
        'workflows',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('type', sa.Enum('Onboarding', 'DepartmentChange', 'Termination', 'EquipmentRequest',
                                  'LeaveRequest', 'ResourceRequest', name='workflowtype'), nullable=False),
        sa.Column('status', sa.Enum(*REQUEST_STATUS, name='requeststatus'), nullable=False),
        sa.Column('details', sa.Text(), nullable=True),
        sa.Column('employee_id', sa.Integer(), sa.ForeignKey('employees.id', ondelete='SET NULL'), nullable=True),
        sa.Column('request_id', sa.Integer(), sa.ForeignKey('requests.id'), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index(op.f('ix_workflows_id'), 'workflows', ['id'], unique=False)
    op.create_index(op.f('ix_workflows_employee_id'), 'workflows', ['employee_id'], unique=False)
    op.create_index(op.f('ix_workflows_request_id'), 'workflows', ['request_id'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables in reverse order of dependencies
    op.drop_table('workflows')
    op.drop_table('request_items')
    op.drop_table('requests')
    op.drop_table('employees')
    op.drop_table('departments')
    op.drop_table('refresh_tokens')
    op.drop_table('accounts')
