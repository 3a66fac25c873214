"""initial_pickup_schema

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19 09:00:00.000000

수령 예약 시스템 초기 스키마.
계정/역할, 직원, 매장, 날짜별 수용량, 수령 예약, 차단 날짜, 푸시 구독 테이블 생성.
Initial schema for the pickup scheduler: accounts and roles, employees,
stores, per-date capacities, pickup schedules, blocked dates and push
subscriptions.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID


# revision identifiers, used by Alembic.
revision: str = 'a1b2c3d4e5f6'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # users: 로그인 계정 (Login accounts)
    op.create_table(
        'users',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('full_name', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('must_change_password', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # user_roles: 사용자당 하나의 역할 (One role per user)
    op.create_table(
        'user_roles',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        'refresh_tokens',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('token', sa.String(512), nullable=False, unique=True),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # employees: 직원 및 월간 수령 한도 (Employees and their monthly quota)
    op.create_table(
        'employees',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('cpf', sa.String(14), nullable=False, unique=True),
        sa.Column('monthly_limit', sa.Integer(), server_default='2', nullable=False),
        sa.Column('current_month_pickups', sa.Integer(), server_default='0', nullable=False),
        sa.Column('last_reset_month', sa.String(7), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # stores: 수령 매장 (Pickup stores)
    op.create_table(
        'stores',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True, unique=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('address', sa.Text(), nullable=False),
        sa.Column('max_daily_capacity', sa.Integer(), server_default='10', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # store_capacities: 매장+날짜별 예약 수와 수용량 재정의
    # Per store/date booking counter and optional override
    op.create_table(
        'store_capacities',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('store_id', UUID(as_uuid=True), sa.ForeignKey('stores.id', ondelete='CASCADE'), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('max_capacity', sa.Integer(), nullable=True),
        sa.Column('used_capacity', sa.Integer(), server_default='0', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_unique_constraint(
        'uq_store_capacity_store_date',
        'store_capacities',
        ['store_id', 'date'],
    )

    # pickup_schedules: 수령 예약 (Pickup reservations)
    op.create_table(
        'pickup_schedules',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('employee_id', UUID(as_uuid=True), sa.ForeignKey('employees.id', ondelete='CASCADE'), nullable=False),
        sa.Column('store_id', UUID(as_uuid=True), sa.ForeignKey('stores.id', ondelete='CASCADE'), nullable=False),
        sa.Column('scheduled_date', sa.Date(), nullable=False),
        sa.Column('quantity', sa.Integer(), server_default='1', nullable=False),
        sa.Column('observations', sa.Text(), nullable=True),
        sa.Column('token', sa.String(32), nullable=False, unique=True),
        sa.Column('status', sa.String(20), server_default='scheduled', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('cancelled_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('cancellation_reason', sa.Text(), nullable=True),
    )

    # 인덱스: Indexes
    op.create_index('ix_pickup_schedules_store_date', 'pickup_schedules', ['store_id', 'scheduled_date'])
    op.create_index('ix_pickup_schedules_employee', 'pickup_schedules', ['employee_id'])

    # blocked_dates: 전 매장 예약 차단 날짜 (Dates closed for every store)
    op.create_table(
        'blocked_dates',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('date', sa.Date(), nullable=False, unique=True),
        sa.Column('reason', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # push_subscriptions: 브라우저 푸시 구독 (Browser push subscriptions)
    op.create_table(
        'push_subscriptions',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('endpoint', sa.Text(), nullable=False),
        sa.Column('p256dh', sa.String(255), nullable=False),
        sa.Column('auth', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_unique_constraint(
        'uq_push_subscription_user_endpoint',
        'push_subscriptions',
        ['user_id', 'endpoint'],
    )


def downgrade() -> None:
    op.drop_table('push_subscriptions')
    op.drop_table('blocked_dates')
    op.drop_index('ix_pickup_schedules_employee', table_name='pickup_schedules')
    op.drop_index('ix_pickup_schedules_store_date', table_name='pickup_schedules')
    op.drop_table('pickup_schedules')
    op.drop_table('store_capacities')
    op.drop_table('stores')
    op.drop_table('employees')
    op.drop_table('refresh_tokens')
    op.drop_table('user_roles')
    op.drop_table('users')
