"""create habit, log and routine tables

Revision ID: 20261019_0001
Revises: 
Create Date: 2026-10-19
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "20261019_0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "habits",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("icon", sa.String(length=64), nullable=True),
        sa.Column("color", sa.String(length=32), nullable=False, server_default="#0D9488"),
        sa.Column("frequency", sa.String(length=16), nullable=False, server_default="daily"),
        sa.Column("target_days_json", sa.String(length=64), nullable=False, server_default="[0, 1, 2, 3, 4, 5, 6]"),
        sa.Column("target_value", sa.Float(), nullable=True),
        sa.Column("unit", sa.String(length=64), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("archived_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_habits_id", "habits", ["id"], unique=False)
    op.create_index("ix_habits_user_id", "habits", ["user_id"], unique=False)
    op.create_index("ix_habits_archived_at", "habits", ["archived_at"], unique=False)

    op.create_table(
        "habit_logs",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("habit_id", sa.Integer(), sa.ForeignKey("habits.id", ondelete="CASCADE"), nullable=False),
        sa.Column("log_date", sa.Date(), nullable=False),
        sa.Column("completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("value", sa.Float(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("habit_id", "log_date", name="uq_habit_log_per_day"),
    )
    op.create_index("ix_habit_logs_id", "habit_logs", ["id"], unique=False)
    op.create_index("ix_habit_logs_user_id", "habit_logs", ["user_id"], unique=False)
    op.create_index("ix_habit_logs_habit_id", "habit_logs", ["habit_id"], unique=False)
    op.create_index("ix_habit_logs_log_date", "habit_logs", ["log_date"], unique=False)

    op.create_table(
        "streaks",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("habit_id", sa.Integer(), sa.ForeignKey("habits.id", ondelete="CASCADE"), nullable=False),
        sa.Column("current", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("longest", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_completed_date", sa.Date(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_streaks_id", "streaks", ["id"], unique=False)
    op.create_index("ix_streaks_user_id", "streaks", ["user_id"], unique=False)
    op.create_index("ix_streaks_habit_id", "streaks", ["habit_id"], unique=True)

    op.create_table(
        "routines",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("habit_ids_json", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("reminder_time", sa.String(length=5), nullable=True),
        sa.Column("color", sa.String(length=32), nullable=False, server_default="#0D9488"),
        sa.Column("icon", sa.String(length=64), nullable=False, server_default="Sun"),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("archived_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_routines_id", "routines", ["id"], unique=False)
    op.create_index("ix_routines_user_id", "routines", ["user_id"], unique=False)
    op.create_index("ix_routines_archived_at", "routines", ["archived_at"], unique=False)

    op.create_table(
        "routine_logs",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("routine_id", sa.Integer(), sa.ForeignKey("routines.id", ondelete="CASCADE"), nullable=False),
        sa.Column("log_date", sa.Date(), nullable=False),
        sa.Column("completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("completed_habits_json", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("routine_id", "log_date", name="uq_routine_log_per_day"),
    )
    op.create_index("ix_routine_logs_id", "routine_logs", ["id"], unique=False)
    op.create_index("ix_routine_logs_user_id", "routine_logs", ["user_id"], unique=False)
    op.create_index("ix_routine_logs_routine_id", "routine_logs", ["routine_id"], unique=False)
    op.create_index("ix_routine_logs_log_date", "routine_logs", ["log_date"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_routine_logs_log_date", table_name="routine_logs")
    op.drop_index("ix_routine_logs_routine_id", table_name="routine_logs")
    op.drop_index("ix_routine_logs_user_id", table_name="routine_logs")
    op.drop_index("ix_routine_logs_id", table_name="routine_logs")
    op.drop_table("routine_logs")

    op.drop_index("ix_routines_archived_at", table_name="routines")
    op.drop_index("ix_routines_user_id", table_name="routines")
    op.drop_index("ix_routines_id", table_name="routines")
    op.drop_table("routines")

    op.drop_index("ix_streaks_habit_id", table_name="streaks")
    op.drop_index("ix_streaks_user_id", table_name="streaks")
    op.drop_index("ix_streaks_id", table_name="streaks")
    op.drop_table("streaks")

    op.drop_index("ix_habit_logs_log_date", table_name="habit_logs")
    op.drop_index("ix_habit_logs_habit_id", table_name="habit_logs")
    op.drop_index("ix_habit_logs_user_id", table_name="habit_logs")
    op.drop_index("ix_habit_logs_id", table_name="habit_logs")
    op.drop_table("habit_logs")

    op.drop_index("ix_habits_archived_at", table_name="habits")
    op.drop_index("ix_habits_user_id", table_name="habits")
    op.drop_index("ix_habits_id", table_name="habits")
    op.drop_table("habits")
