"""goals, profiles and recommendations

Revision ID: 20261019_0002
Revises: 20261019_0001
Create Date: 2026-10-19
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "20261019_0002"
down_revision: Union[str, None] = "20261019_0001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "habit_goals",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("habit_id", sa.Integer(), sa.ForeignKey("habits.id", ondelete="CASCADE"), nullable=False),
        sa.Column("target_days", sa.Integer(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_habit_goals_id", "habit_goals", ["id"], unique=False)
    op.create_index("ix_habit_goals_user_id", "habit_goals", ["user_id"], unique=False)
    op.create_index("ix_habit_goals_habit_id", "habit_goals", ["habit_id"], unique=False)

    op.create_table(
        "goal_checkins",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("goal_id", sa.Integer(), sa.ForeignKey("habit_goals.id", ondelete="CASCADE"), nullable=False),
        sa.Column("check_date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(length=8), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_goal_checkins_id", "goal_checkins", ["id"], unique=False)
    op.create_index("ix_goal_checkins_goal_id", "goal_checkins", ["goal_id"], unique=False)
    op.create_index("ix_goal_checkins_check_date", "goal_checkins", ["check_date"], unique=False)

    op.create_table(
        "profiles",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("display_name", sa.String(length=255), nullable=True),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("gender", sa.String(length=32), nullable=True),
        sa.Column("occupation_category", sa.String(length=32), nullable=True),
        sa.Column("height_cm", sa.Float(), nullable=True),
        sa.Column("weight_kg", sa.Float(), nullable=True),
        sa.Column("lifestyle_focus_json", sa.Text(), nullable=True),
        sa.Column("survey_completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("survey_completed_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_profiles_id", "profiles", ["id"], unique=False)
    op.create_index("ix_profiles_user_id", "profiles", ["user_id"], unique=True)

    op.create_table(
        "habit_recommendations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("category", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("icon", sa.String(length=64), nullable=True),
        sa.Column("color", sa.String(length=32), nullable=False),
        sa.Column("frequency", sa.String(length=16), nullable=False, server_default="daily"),
        sa.Column("target_days_json", sa.String(length=64), nullable=False, server_default="[0, 1, 2, 3, 4, 5, 6]"),
        sa.Column("target_value", sa.Float(), nullable=True),
        sa.Column("unit", sa.String(length=64), nullable=True),
        sa.Column("reasoning", sa.Text(), nullable=False),
        sa.Column("confidence_score", sa.Float(), nullable=False),
        sa.Column("tags_json", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("is_applied", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_habit_recommendations_id", "habit_recommendations", ["id"], unique=False)
    op.create_index("ix_habit_recommendations_user_id", "habit_recommendations", ["user_id"], unique=False)
    op.create_index("ix_habit_recommendations_category", "habit_recommendations", ["category"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_habit_recommendations_category", table_name="habit_recommendations")
    op.drop_index("ix_habit_recommendations_user_id", table_name="habit_recommendations")
    op.drop_index("ix_habit_recommendations_id", table_name="habit_recommendations")
    op.drop_table("habit_recommendations")

    op.drop_index("ix_profiles_user_id", table_name="profiles")
    op.drop_index("ix_profiles_id", table_name="profiles")
    op.drop_table("profiles")

    op.drop_index("ix_goal_checkins_check_date", table_name="goal_checkins")
    op.drop_index("ix_goal_checkins_goal_id", table_name="goal_checkins")
    op.drop_index("ix_goal_checkins_id", table_name="goal_checkins")
    op.drop_table("goal_checkins")

    op.drop_index("ix_habit_goals_habit_id", table_name="habit_goals")
    op.drop_index("ix_habit_goals_user_id", table_name="habit_goals")
    op.drop_index("ix_habit_goals_id", table_name="habit_goals")
    op.drop_table("habit_goals")
